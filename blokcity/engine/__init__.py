"""
Blok City Warz rules engine.
Pure dice, table lookups, spawn resolution and the game state reducer.
No web framework, database, or UI.
"""

MIN_TURN = 1
MAX_TURN = 10

# Ready track caps at 6; every other stat only has a floor of 0
READY_MAX = 6
