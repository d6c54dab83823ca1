"""Hint search over legal moves."""

from dataclasses import dataclass
from enum import Enum, auto

from spider.board import Board
from spider.completion import ends_with_complete_run
from spider.errors import InvalidDestination
from spider.moves import Move, max_run_length, validate_move


class HintCategory(Enum):
    """Why a move was suggested, best first."""

    COMPLETE_RUN = auto()  # Finishes a King-to-Ace run
    REVEAL_CARD = auto()  # Turns up a face-down card
    LONGEST_RUN = auto()  # Moves the most cards
    FIRST_AVAILABLE = auto()  # Nothing better, first legal move

    def __str__(self) -> str:
        return self.name.replace("_", " ").lower()


@dataclass(frozen=True)
class MoveSuggestion:
    """A suggested move and the reason it was picked."""

    move: Move
    category: HintCategory

    def __str__(self) -> str:
        return f"{self.move} ({self.category})"


def find_moves(board: Board) -> list[Move]:
    """
    List every legal move in search order.

    Sources 0-9, then destinations 0-9, then run lengths longest first.
    Moving a whole column into an empty column changes nothing and is
    left out.

    Args:
        board: Board to search (not modified)

    Returns:
        Legal moves
    """
    moves: list[Move] = []
    for source in range(board.column_count):
        longest = max_run_length(board, source)
        if longest == 0:
            continue
        source_size = len(board.column(source))
        for destination in range(board.column_count):
            if destination == source:
                continue
            to_empty = board.is_column_empty(destination)
            for length in range(longest, 0, -1):
                if to_empty and length == source_size:
                    continue
                try:
                    moves.append(validate_move(board, source, length, destination))
                except InvalidDestination:
                    continue
    return moves


def _categorize(board: Board, move: Move) -> HintCategory | None:
    source = board.column(move.source)
    run = source[len(source) - move.run_length:]
    if ends_with_complete_run(board.column(move.destination) + run):
        return HintCategory.COMPLETE_RUN
    below = len(source) - move.run_length - 1
    if below >= 0 and not source[below].face_up:
        return HintCategory.REVEAL_CARD
    return None


def hint(board: Board) -> MoveSuggestion | None:
    """
    Suggest a move without changing the board.

    Priority: completes a run, then reveals a card, then the longest run,
    then the first legal move found.

    Returns:
        The suggestion, or None if no legal move exists
    """
    moves = find_moves(board)
    if not moves:
        return None

    best: dict[HintCategory, Move] = {}
    for move in moves:
        category = _categorize(board, move)
        if category is not None and category not in best:
            best[category] = move
    for category in (HintCategory.COMPLETE_RUN, HintCategory.REVEAL_CARD):
        if category in best:
            return MoveSuggestion(best[category], category)

    longest = max(moves, key=lambda m: m.run_length)
    if any(m.run_length < longest.run_length for m in moves):
        return MoveSuggestion(longest, HintCategory.LONGEST_RUN)
    return MoveSuggestion(moves[0], HintCategory.FIRST_AVAILABLE)
