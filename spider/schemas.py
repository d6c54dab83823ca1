"""Pydantic schemas for exporting and importing board snapshots."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from spider.board import GameState
from spider.cards import Card, Rank, Suit, SuitMode

SCHEMA_VERSION = 1


class CardModel(BaseModel):
    """Card representation."""

    model_config = ConfigDict(frozen=True)

    suit: Literal["CLUBS", "DIAMONDS", "HEARTS", "SPADES"]
    rank: int = Field(..., ge=1, le=13, description="1 = Ace ... 13 = King")
    face_up: bool = False
    uid: int = Field(default=0, ge=0)

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(suit=card.suit.name, rank=card.rank.value, face_up=card.face_up, uid=card.uid)

    def to_card(self) -> Card:
        """Convert back to an engine card."""
        return Card(Suit[self.suit], Rank(self.rank), self.face_up, self.uid)


class GameStateModel(BaseModel):
    """Board snapshot representation."""

    version: Literal[1] = SCHEMA_VERSION
    suit_mode: Literal[1, 2, 4] = 1
    columns: list[list[CardModel]] = Field(..., min_length=10, max_length=10)
    stock: list[CardModel] = Field(default_factory=list)
    foundations: list[bool] = Field(..., min_length=8, max_length=8)

    @model_validator(mode="after")
    def check_card_total(self) -> "GameStateModel":
        """Every card must be on the table, in the stock or in a foundation."""
        on_table = sum(len(c) for c in self.columns) + len(self.stock)
        total = on_table + 13 * sum(self.foundations)
        if total != 104:
            raise ValueError(f"Snapshot accounts for {total} cards, expected 104")
        return self

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        """Build the schema from an engine snapshot."""
        return cls(
            suit_mode=state.suit_mode.value,
            columns=[[CardModel.from_card(c) for c in column] for column in state.columns],
            stock=[CardModel.from_card(c) for c in state.stock],
            foundations=list(state.foundations),
        )

    def to_state(self) -> GameState:
        """Convert back to an engine snapshot."""
        return GameState(
            columns=tuple(tuple(c.to_card() for c in column) for column in self.columns),
            stock=tuple(c.to_card() for c in self.stock),
            foundations=tuple(self.foundations),
            suit_mode=SuitMode.parse(self.suit_mode),
        )


def dump_state(state: GameState) -> str:
    """Serialize a snapshot to a JSON string."""
    return GameStateModel.from_state(state).model_dump_json()


def load_state(blob: str | bytes) -> GameState:
    """
    Parse a snapshot from JSON.

    Raises:
        pydantic.ValidationError: The blob is malformed or inconsistent
    """
    return GameStateModel.model_validate_json(blob).to_state()
