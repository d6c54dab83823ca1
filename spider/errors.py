"""Engine error taxonomy."""


class EngineError(Exception):
    """Base class for every rejected engine command."""

    @property
    def code(self) -> str:
        """Return the stable error name used in events."""
        return type(self).__name__


class ColumnOutOfRange(EngineError):
    """A column index is outside the tableau."""

    def __init__(self, index: int, column_count: int = 10) -> None:
        super().__init__(f"Column {index} is outside 0-{column_count - 1}")
        self.index = index


class InvalidSequence(EngineError):
    """The requested cards are not a movable same-suit descending run."""


class InvalidDestination(EngineError):
    """The run cannot be placed on the destination column."""


class EmptyStock(EngineError):
    """Too few cards remain in the stock to deal a row."""


class BlockedDeal(EngineError):
    """Dealing is not allowed while a tableau column is empty."""


class NothingToUndo(EngineError):
    """The history stack is empty."""


class GameNotStarted(EngineError):
    """A command was issued before a game was dealt."""
