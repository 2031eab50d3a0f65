"""
What each intent tells an enemy to do on its activation (two actions per activation).
Reference text for the table; the engine does not enforce movement or range.
"""

from dataclasses import dataclass, field
from typing import Any

from blokcity.engine.definitions import EnemyType, Intent


@dataclass(frozen=True)
class ActionStep:
    label: str
    detail: str


@dataclass(frozen=True)
class IntentBehaviour:
    summary: str
    actions: list[ActionStep] = field(default_factory=list)
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out = {
            "summary": self.summary,
            "actions": [{"label": a.label, "detail": a.detail} for a in self.actions],
        }
        if self.note:
            out["note"] = self.note
        return out


INTENT_BEHAVIOURS: dict[Intent, IntentBehaviour] = {
    Intent.COMBAT: IntentBehaviour(
        summary="Close distance and attack",
        actions=[
            ActionStep("1st", "In range? Attack. Otherwise move/climb toward closest player."),
            ActionStep("2nd", "In range? Attack. Otherwise D6: 1-3 Ready, 4-6 Move toward player (cover)."),
        ],
    ),
    Intent.SLAM: IntentBehaviour(
        summary="Rush into base contact and slam",
        actions=[
            ActionStep("1st", "Move/climb toward closest player."),
            ActionStep("2nd", "Base-to-base? Slam. Otherwise D6: 1-2 Ready, 3-6 Move (free Slam if contact)."),
        ],
    ),
    Intent.BUFF_TOKEN_DENIAL: IntentBehaviour(
        summary="Move toward and activate Buff Tokens",
        actions=[
            ActionStep("1st", 'Move toward closest Buff Token (cover). Within 1"? Activate it, spawn, re-roll intent.'),
            ActionStep("2nd", 'Move toward closest Buff Token (cover). Within 1"? Activate it, spawn, re-roll intent.'),
        ],
    ),
    Intent.EVASIVE_MANOEUVRES: IntentBehaviour(
        summary="Avoid engagement and reposition",
        actions=[
            ActionStep("1st", "Move away from closest player, ending in cover if possible."),
            ActionStep("2nd", "Move away from closest player, ending in cover if possible."),
        ],
        note="Unique Citizen only",
    ),
    Intent.COMMANDING_ORDERS: IntentBehaviour(
        summary="Command or spawn reinforcements",
        actions=[
            ActionStep(
                "1st",
                "Goon/Henchman in play? Pick one and re-roll their intent. "
                "None in play? D6: 1-3 spawn Goon, 4-6 spawn Henchman.",
            ),
            ActionStep(
                "2nd",
                "Spawned a new enemy? Activate them for one action. "
                "Re-rolled intent? That enemy activates for one action.",
            ),
        ],
    ),
}

# Unique Citizens command anyone and fall back to the standard spawn table
UC_COMMANDING_ORDERS = IntentBehaviour(
    summary="Command or spawn reinforcements",
    actions=[
        ActionStep(
            "1st",
            "Non-UC enemy in play? Pick one and re-roll their intent. "
            "None in play? Use Standard Spawn table.",
        ),
        ActionStep(
            "2nd",
            "Spawned a new enemy? Activate them for two actions. "
            "Re-rolled intent? That enemy activates for two actions.",
        ),
    ],
)


def get_intent_behaviour(intent: Intent, enemy_type: EnemyType | None = None) -> IntentBehaviour:
    intent = Intent(intent)
    if intent == Intent.COMMANDING_ORDERS and enemy_type == EnemyType.UNIQUE_CITIZEN:
        return UC_COMMANDING_ORDERS
    return INTENT_BEHAVIOURS[intent]
