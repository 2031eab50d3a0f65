"""
SQLAlchemy models: the game index and the per-game saved state.
"""

from sqlalchemy import Column, String, Text, BigInteger

from .database import Base


class GameSummary(Base):
    """One row per registered game (the game list shown on the home screen)."""
    __tablename__ = "game_summaries"

    slug = Column(String(128), primary_key=True)
    game_name = Column(String(128), nullable=False)
    created_at = Column(BigInteger, nullable=False)  # epoch millis


class GameRecord(Base):
    """Serialized GameState, keyed by the storage key derived from the slug."""
    __tablename__ = "game_states"

    storage_key = Column(String(160), primary_key=True)  # GAME_KEY_PREFIX + slug
    slug = Column(String(128), nullable=False, index=True)
    game_state = Column(Text, nullable=False)  # JSON string of full game state
