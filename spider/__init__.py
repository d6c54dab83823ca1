"""Core Spider Solitaire engine - 100% UI-agnostic."""

from spider.cards import Card, Rank, Suit, SuitMode
from spider.board import Board, GameState
from spider.deck import build_deck, deal, shuffle
from spider.errors import (
    BlockedDeal,
    ColumnOutOfRange,
    EmptyStock,
    EngineError,
    GameNotStarted,
    InvalidDestination,
    InvalidSequence,
    NothingToUndo,
)
from spider.hints import HintCategory, MoveSuggestion
from spider.moves import Move, MoveOutcome
from spider.rules import RuleSet

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "SuitMode",
    "Board",
    "GameState",
    "build_deck",
    "deal",
    "shuffle",
    "EngineError",
    "ColumnOutOfRange",
    "InvalidSequence",
    "InvalidDestination",
    "EmptyStock",
    "BlockedDeal",
    "NothingToUndo",
    "GameNotStarted",
    "HintCategory",
    "MoveSuggestion",
    "Move",
    "MoveOutcome",
    "RuleSet",
]
