"""Move validation and application."""

from dataclasses import dataclass

from spider.board import Board
from spider.cards import Card
from spider.completion import complete_run
from spider.errors import ColumnOutOfRange, InvalidDestination, InvalidSequence


@dataclass(frozen=True)
class Move:
    """A request to move the top ``run_length`` cards between two columns."""

    source: int
    destination: int
    run_length: int = 1

    @classmethod
    def from_index(cls, board: Board, source: int, start_index: int, destination: int) -> "Move":
        """Describe a move by the index of the run's first card in its column."""
        size = len(board.column(source))
        return cls(source, destination, size - start_index)

    def __str__(self) -> str:
        return f"{self.run_length} card(s) {self.source} -> {self.destination}"


@dataclass(frozen=True)
class MoveOutcome:
    """What a successful move changed, for the caller to re-render."""

    move: Move
    revealed: bool = False
    completed: bool = False

    @property
    def columns(self) -> tuple[int, int]:
        """Return the source and destination column indices."""
        return (self.move.source, self.move.destination)


def is_run(cards: tuple[Card, ...] | list[Card]) -> bool:
    """Check if cards are face-up, same-suit and descending by one."""
    if not cards or not all(card.face_up for card in cards):
        return False
    return all(upper.continues_run(lower) for lower, upper in zip(cards, cards[1:]))


def max_run_length(board: Board, index: int) -> int:
    """Return the length of the longest movable run on top of a column."""
    column = board.column(index)
    if not column or not column[-1].face_up:
        return 0
    length = 1
    while length < len(column):
        lower = column[-length - 1]
        if not lower.face_up or not column[-length].continues_run(lower):
            break
        length += 1
    return length


def validate_move(board: Board, source: int, run_length: int, destination: int) -> Move:
    """
    Check a move without changing the board.

    Args:
        board: Board to check against
        source: Column the run leaves
        run_length: Number of cards taken from the top of the source
        destination: Column the run lands on

    Returns:
        The validated move

    Raises:
        ColumnOutOfRange: Either index is outside the tableau
        InvalidSequence: The cards are not a movable run
        InvalidDestination: The run cannot be placed on the destination
    """
    for index in (source, destination):
        if not 0 <= index < board.column_count:
            raise ColumnOutOfRange(index, board.column_count)

    column = board.column(source)
    if not 1 <= run_length <= len(column):
        raise InvalidSequence(
            f"Cannot take {run_length} card(s) from column {source} of {len(column)}"
        )
    run = column[len(column) - run_length:]
    if not is_run(run):
        raise InvalidSequence(
            f"Top {run_length} card(s) of column {source} are not a same-suit descending run"
        )

    if source == destination:
        raise InvalidDestination(f"Column {source} cannot move onto itself")
    target = board.top_card(destination)
    if target is not None and not run[0].rank.follows(target.rank):
        raise InvalidDestination(f"{run[0]} cannot be placed on {target}")

    return Move(source, destination, run_length)


def apply_move(board: Board, source: int, run_length: int, destination: int) -> MoveOutcome:
    """
    Validate and perform a move, then collect a completed run.

    Raises the same errors as ``validate_move``; the board is untouched
    when it does.
    """
    move = validate_move(board, source, run_length, destination)
    board._place(destination, board._take_run(source, run_length))
    revealed = board._reveal_top(source)
    completed = complete_run(board, destination)
    return MoveOutcome(move, revealed=revealed, completed=completed)
