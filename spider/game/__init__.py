"""Game engine and lifecycle management."""

from spider.game.events import GameEvent, EventEmitter, EventType
from spider.game.state import GamePhase
from spider.game.engine import SpiderGame

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "GamePhase",
    "SpiderGame",
]
