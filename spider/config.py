"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from spider.cards import SuitMode
from spider.rules import RuleSet


def _parse_suit_mode() -> SuitMode:
    """Parse SPIDER_SUIT_MODE environment variable."""
    return SuitMode.parse(os.getenv("SPIDER_SUIT_MODE", "1"))


def _parse_seed() -> int | None:
    """Parse SPIDER_SEED environment variable (unset or blank means random)."""
    raw = os.getenv("SPIDER_SEED", "").strip()
    if not raw:
        return None
    return int(raw)


@dataclass(frozen=True)
class GameConfig:
    """Default new-game configuration."""

    suit_mode: SuitMode = field(default_factory=_parse_suit_mode)
    seed: int | None = field(default_factory=_parse_seed)


@dataclass(frozen=True)
class EventConfig:
    """Event system configuration."""

    keep_history: bool = field(
        default_factory=lambda: os.getenv("SPIDER_EVENT_HISTORY", "true").lower() == "true"
    )


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration."""

    game: GameConfig = field(default_factory=GameConfig)
    events: EventConfig = field(default_factory=EventConfig)

    @property
    def rules(self) -> RuleSet:
        """Build the table rules for the configured suit mode."""
        return RuleSet.for_mode(self.game.suit_mode)


# Global configuration instance
config = EngineConfig()
