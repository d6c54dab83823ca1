"""Detection of completed King-to-Ace runs."""

from typing import Sequence

from spider.board import Board
from spider.cards import Card, Rank


def is_complete_run(cards: Sequence[Card]) -> bool:
    """
    Check if cards are a face-up King down to Ace of a single suit.

    Args:
        cards: Exactly the cards to test, bottom to top

    Returns:
        True for a full 13-card run in order
    """
    if len(cards) != len(Rank):
        return False
    suit = cards[0].suit
    for card, rank in zip(cards, reversed(Rank)):
        if not card.face_up or card.suit != suit or card.rank != rank:
            return False
    return True


def ends_with_complete_run(column: Sequence[Card]) -> bool:
    """Check if the last 13 cards of a column are a full run."""
    return len(column) >= len(Rank) and is_complete_run(column[len(column) - len(Rank):])


def complete_run(board: Board, index: int) -> bool:
    """
    Move a completed run at the foot of a column to a foundation.

    The last 13 cards are removed, the first empty foundation slot is
    filled and a face-down card left on top is turned up.

    Args:
        board: Live board
        index: Column to inspect

    Returns:
        True if a run was collected
    """
    if not ends_with_complete_run(board.column(index)):
        return False
    if board.filled_foundations >= len(board.foundations):
        return False

    board._take_run(index, board.rules.run_length)
    board._fill_foundation()
    board._reveal_top(index)
    return True


def complete_runs(board: Board) -> list[int]:
    """Collect completed runs from every column, returning their indices."""
    return [i for i in range(board.column_count) if complete_run(board, i)]
