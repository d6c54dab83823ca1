"""Tableau, stock and foundation state plus immutable snapshots."""

from dataclasses import dataclass
from typing import Iterable, Iterator

from spider.cards import Card, SuitMode
from spider.errors import BlockedDeal, ColumnOutOfRange, EmptyStock
from spider.rules import RuleSet


@dataclass(frozen=True)
class GameState:
    """
    Immutable copy of a board.

    Cards are frozen and every container is a tuple, so a snapshot shares no
    mutable state with the board it was taken from.
    """

    columns: tuple[tuple[Card, ...], ...]
    stock: tuple[Card, ...]
    foundations: tuple[bool, ...]
    suit_mode: SuitMode = SuitMode.ONE

    @property
    def filled_foundations(self) -> int:
        """Return the number of completed runs."""
        return sum(self.foundations)

    @property
    def card_count(self) -> int:
        """Return the number of cards still on the table or in the stock."""
        return sum(len(c) for c in self.columns) + len(self.stock)


class Board:
    """
    The live Spider board: ten columns, a stock and eight foundations.

    Callers get read-only views. The underscore mutators are reserved for
    the move, completion and engine modules.
    """

    def __init__(
        self,
        columns: Iterable[Iterable[Card]],
        stock: Iterable[Card] = (),
        foundations: Iterable[bool] | None = None,
        rules: RuleSet | None = None,
    ) -> None:
        self.rules = rules or RuleSet()
        self._columns: list[list[Card]] = [list(c) for c in columns]
        self._stock: list[Card] = list(stock)
        if foundations is None:
            self._foundations = [False] * self.rules.foundation_count
        else:
            self._foundations = list(foundations)

        if len(self._columns) != self.rules.column_count:
            raise ValueError(
                f"Board needs {self.rules.column_count} columns, got {len(self._columns)}"
            )
        if len(self._foundations) != self.rules.foundation_count:
            raise ValueError(
                f"Board needs {self.rules.foundation_count} foundations, "
                f"got {len(self._foundations)}"
            )

    @classmethod
    def empty(cls, rules: RuleSet | None = None) -> "Board":
        """Create a board with no cards at all."""
        rules = rules or RuleSet()
        return cls([[] for _ in range(rules.column_count)], rules=rules)

    # Read-only views

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._columns):
            raise ColumnOutOfRange(index, len(self._columns))

    def column(self, index: int) -> tuple[Card, ...]:
        """Return a column, bottom to top."""
        self._check_index(index)
        return tuple(self._columns[index])

    @property
    def columns(self) -> tuple[tuple[Card, ...], ...]:
        """Return every column, bottom to top."""
        return tuple(tuple(c) for c in self._columns)

    @property
    def stock(self) -> tuple[Card, ...]:
        """Return the stock; its last card is dealt first."""
        return tuple(self._stock)

    @property
    def stock_size(self) -> int:
        """Return the number of cards left in the stock."""
        return len(self._stock)

    @property
    def foundations(self) -> tuple[bool, ...]:
        """Return which foundation slots hold a completed run."""
        return tuple(self._foundations)

    @property
    def filled_foundations(self) -> int:
        """Return the number of completed runs."""
        return sum(self._foundations)

    @property
    def column_count(self) -> int:
        return len(self._columns)

    def is_column_empty(self, index: int) -> bool:
        """Check if a column has no cards."""
        self._check_index(index)
        return not self._columns[index]

    def top_card(self, index: int) -> Card | None:
        """Return the top card of a column, or None if it is empty."""
        self._check_index(index)
        column = self._columns[index]
        return column[-1] if column else None

    def face_up_run(self, index: int) -> tuple[Card, ...]:
        """Return the face-up cards at the top of a column."""
        self._check_index(index)
        column = self._columns[index]
        start = len(column)
        while start > 0 and column[start - 1].face_up:
            start -= 1
        return tuple(column[start:])

    @property
    def card_count(self) -> int:
        """Return cards in columns and stock plus those in filled foundations."""
        on_table = sum(len(c) for c in self._columns) + len(self._stock)
        return on_table + self.filled_foundations * self.rules.run_length

    @property
    def is_won(self) -> bool:
        """Check if every foundation slot is filled."""
        return all(self._foundations)

    @property
    def can_deal(self) -> bool:
        """Check if a stock deal would be accepted."""
        try:
            self.check_deal()
        except (BlockedDeal, EmptyStock):
            return False
        return True

    def __iter__(self) -> Iterator[tuple[Card, ...]]:
        return iter(self.columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._columns == other._columns
            and self._stock == other._stock
            and self._foundations == other._foundations
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        sizes = [len(c) for c in self._columns]
        return (
            f"Board(columns={sizes}, stock={len(self._stock)}, "
            f"foundations={self.filled_foundations})"
        )

    def __str__(self) -> str:
        lines = [
            f"Foundations: {self.filled_foundations}/{len(self._foundations)}"
            f"    Stock: {len(self._stock)}"
        ]
        lines.append("  ".join(f"{i:>3}" for i in range(len(self._columns))))
        depth = max((len(c) for c in self._columns), default=0)
        for row in range(depth):
            cells = []
            for column in self._columns:
                cells.append(f"{str(column[row]):>3}" if row < len(column) else "   ")
            lines.append("  ".join(cells).rstrip())
        return "\n".join(lines)

    # Stock dealing

    def check_deal(self) -> None:
        """
        Check that a stock deal is allowed.

        Raises:
            BlockedDeal: A column is empty (checked first)
            EmptyStock: Fewer than one card per column remains
        """
        if self.rules.block_deal_on_empty_column:
            empty = [i for i, c in enumerate(self._columns) if not c]
            if empty:
                raise BlockedDeal(f"Cannot deal while column {empty[0]} is empty")
        if len(self._stock) < self.rules.stock_deal_size:
            raise EmptyStock(
                f"Stock has {len(self._stock)} cards, "
                f"a deal needs {self.rules.stock_deal_size}"
            )

    def deal_from_stock(self) -> None:
        """Deal one face-up card from the stock onto each column, 0 to 9."""
        self.check_deal()
        for column in self._columns:
            column.append(self._stock.pop().turned_up())

    # Mutators used by the move and completion modules

    def _take_run(self, index: int, length: int) -> list[Card]:
        column = self._columns[index]
        run = column[len(column) - length:]
        del column[len(column) - length:]
        return run

    def _place(self, index: int, cards: list[Card]) -> None:
        self._columns[index].extend(cards)

    def _reveal_top(self, index: int) -> bool:
        column = self._columns[index]
        if column and not column[-1].face_up:
            column[-1] = column[-1].turned_up()
            return True
        return False

    def _fill_foundation(self) -> int:
        slot = self._foundations.index(False)
        self._foundations[slot] = True
        return slot

    # Snapshots

    def snapshot(self) -> GameState:
        """Capture an immutable copy of this board."""
        return GameState(
            columns=self.columns,
            stock=self.stock,
            foundations=self.foundations,
            suit_mode=self.rules.suit_mode,
        )

    @classmethod
    def from_snapshot(cls, state: GameState, rules: RuleSet | None = None) -> "Board":
        """Rebuild a live board from a snapshot."""
        return cls(
            columns=state.columns,
            stock=state.stock,
            foundations=state.foundations,
            rules=rules or RuleSet.for_mode(state.suit_mode),
        )

    def copy(self) -> "Board":
        """Return an independent copy of this board."""
        return Board.from_snapshot(self.snapshot(), self.rules)

    def check_invariants(self) -> None:
        """Raise AssertionError if the board breaks a structural invariant."""
        for index, column in enumerate(self._columns):
            seen_face_up = False
            for card in column:
                if card.face_up:
                    seen_face_up = True
                elif seen_face_up:
                    raise AssertionError(
                        f"Column {index} has a face-down card above a face-up card"
                    )
            if column and not column[-1].face_up:
                raise AssertionError(f"Column {index} has a face-down top card")
        if any(card.face_up for card in self._stock):
            raise AssertionError("Stock holds a face-up card")
        if self.card_count != self.rules.deck_size:
            raise AssertionError(
                f"Board holds {self.card_count} cards, expected {self.rules.deck_size}"
            )
