"""Undo history built from board snapshots."""

from typing import Iterator

from spider.board import Board, GameState
from spider.errors import NothingToUndo


class HistoryManager:
    """
    Stack of snapshots taken before each mutating command.

    Unbounded for the lifetime of one game. There is no redo.
    """

    def __init__(self) -> None:
        self._snapshots: list[GameState] = []

    def push(self, board: Board) -> GameState:
        """Record the board as it is now, before a change is applied."""
        state = board.snapshot()
        self._snapshots.append(state)
        return state

    def pop(self) -> GameState:
        """
        Remove and return the most recent snapshot.

        Raises:
            NothingToUndo: The stack is empty
        """
        if not self._snapshots:
            raise NothingToUndo("Nothing to undo")
        return self._snapshots.pop()

    def peek(self) -> GameState | None:
        """Return the most recent snapshot without removing it."""
        return self._snapshots[-1] if self._snapshots else None

    def clear(self) -> None:
        """Forget every snapshot."""
        self._snapshots.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[GameState]:
        return iter(self._snapshots)
