"""Spider Solitaire game engine with lifecycle state machine."""

import logging
from dataclasses import replace
from random import Random
from typing import Callable

from transitions import Machine

from spider.board import Board, GameState
from spider.cards import Card, SuitMode
from spider.completion import complete_runs
from spider.config import EngineConfig, config as default_config
from spider.deck import new_board
from spider.errors import EngineError, GameNotStarted
from spider.game.events import EventEmitter, EventType, GameEvent
from spider.game.state import GamePhase, sources_for
from spider.hints import MoveSuggestion, hint as find_hint
from spider.history import HistoryManager
from spider.moves import Move, MoveOutcome, apply_move, validate_move
from spider.rules import RuleSet

logger = logging.getLogger(__name__)


class SpiderGame:
    """
    Spider Solitaire engine.

    Owns the one live board, its undo history and the event stream. This is
    the core game logic, completely UI-agnostic: callers issue one command
    at a time and observe results through return values, read accessors and
    events. Rejected commands raise an ``EngineError`` before anything
    changes.

    Not thread-safe; callers serialize access.
    """

    # State machine states
    STATES = [p.state_name for p in GamePhase]

    # State machine transitions, derived from VALID_TRANSITIONS
    TRANSITIONS = [
        {
            "trigger": "begin_play",
            "source": sources_for(GamePhase.PLAYING),
            "dest": GamePhase.PLAYING.state_name,
        },
        {
            "trigger": "declare_win",
            "source": sources_for(GamePhase.WON),
            "dest": GamePhase.WON.state_name,
        },
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        keep_event_history: bool = True,
    ) -> None:
        """
        Initialize an engine with no game dealt.

        Args:
            rules: Table rules (one suit by default)
            keep_event_history: Record emitted events in ``events.history``
        """
        self.rules = rules or RuleSet()
        self._board = Board.empty(self.rules)
        self._initial: GameState | None = None
        self.history = HistoryManager()
        self.events = EventEmitter(keep_history=keep_event_history)

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="not_started",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @classmethod
    def from_config(cls, cfg: EngineConfig | None = None) -> "SpiderGame":
        """Create an engine and deal a game from configuration."""
        cfg = cfg or default_config
        game = cls(rules=cfg.rules, keep_event_history=cfg.events.keep_history)
        game.new_game(seed=cfg.game.seed)
        return game

    @property
    def phase(self) -> GamePhase:
        """Get current lifecycle phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    @property
    def mode(self) -> SuitMode:
        return self.rules.suit_mode

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # Read accessors

    @property
    def board(self) -> Board:
        """Return an independent copy of the live board."""
        return self._board.copy()

    @property
    def columns(self) -> tuple[tuple[Card, ...], ...]:
        """Return every column, bottom to top."""
        return self._board.columns

    @property
    def stock_size(self) -> int:
        return self._board.stock_size

    @property
    def foundation_count(self) -> int:
        """Return the number of filled foundation slots."""
        return self._board.filled_foundations

    @property
    def can_undo(self) -> bool:
        """Check if there is a command to undo."""
        return self.history.can_undo

    @property
    def can_deal(self) -> bool:
        """Check if a stock deal would be accepted."""
        return self.phase != GamePhase.NOT_STARTED and self._board.can_deal

    def snapshot(self) -> GameState:
        """Capture the current board as an immutable snapshot."""
        return self._board.snapshot()

    def is_won(self) -> bool:
        """Check if every foundation slot is filled."""
        return self._board.is_won

    def is_stuck(self) -> bool:
        """Check if no move and no stock deal is possible."""
        if self.phase != GamePhase.PLAYING:
            return False
        return find_hint(self._board) is None and not self._board.can_deal

    # Lifecycle commands

    def new_game(
        self,
        mode: SuitMode | int | str | None = None,
        seed: int | None = None,
        rng: Random | None = None,
    ) -> GameState:
        """
        Shuffle and deal a new game, discarding the current one.

        Args:
            mode: Suit mode (keeps the current one if omitted)
            seed: Seed for a reproducible deal
            rng: Random source to shuffle with (overrides seed)

        Returns:
            Snapshot of the opening layout
        """
        if mode is not None:
            self.rules = replace(self.rules, suit_mode=SuitMode.parse(mode))
        rng = rng or Random(seed)

        self._board = new_board(rng=rng, rules=self.rules)
        self._initial = self._board.snapshot()
        self.history.clear()
        self.begin_play()

        logger.debug("New %s game dealt (seed=%s)", self.rules.suit_mode, seed)
        self.events.emit_new(
            EventType.GAME_STARTED,
            mode=self.rules.suit_mode.value,
            seed=seed,
            stock=self._board.stock_size,
        )
        return self._initial

    def resume(self, state: GameState) -> None:
        """
        Continue a game from a saved snapshot.

        The snapshot becomes the replay point; undo history starts empty.
        """
        self.rules = replace(self.rules, suit_mode=state.suit_mode)
        self._board = Board.from_snapshot(state, self.rules)
        self._initial = state
        self.history.clear()
        self.begin_play()

        logger.debug("Resumed %s game", self.rules.suit_mode)
        self.events.emit_new(
            EventType.GAME_STARTED,
            mode=self.rules.suit_mode.value,
            seed=None,
            stock=self._board.stock_size,
            resumed=True,
        )
        self._check_win()

    def restart(self, rng: Random | None = None) -> GameState:
        """
        Shuffle and deal a fresh game in the current suit mode.

        Args:
            rng: Random source to shuffle with (a fresh one if omitted)

        Returns:
            Snapshot of the new opening layout

        Raises:
            GameNotStarted: No game has been dealt
        """
        try:
            self._require_started()
        except EngineError as exc:
            self._reject("restart", exc)
            raise

        self._board = new_board(rng=rng or Random(), rules=self.rules)
        self._initial = self._board.snapshot()
        self.history.clear()
        self.begin_play()

        logger.debug("Game restarted with a fresh %s deal", self.rules.suit_mode)
        self.events.emit_new(
            EventType.GAME_RESTARTED,
            mode=self.rules.suit_mode.value,
            stock=self._board.stock_size,
        )
        return self._initial

    def replay(self) -> GameState:
        """
        Return to the opening layout of the current deal.

        Raises:
            GameNotStarted: No game has been dealt
        """
        try:
            initial = self._require_started()
        except EngineError as exc:
            self._reject("replay", exc)
            raise

        self._board = Board.from_snapshot(initial, self.rules)
        self.history.clear()
        self.begin_play()

        logger.debug("Replaying the current deal")
        self.events.emit_new(
            EventType.GAME_RESTARTED,
            mode=self.rules.suit_mode.value,
            replay=True,
        )
        return initial

    # Play commands

    def deal_from_stock(self) -> None:
        """
        Deal one card from the stock onto every column.

        Raises:
            BlockedDeal: A column is empty
            EmptyStock: The stock cannot cover every column
        """
        try:
            self._require_started()
            self._board.check_deal()
        except EngineError as exc:
            self._reject("deal", exc)
            raise

        self.history.push(self._board)
        self._board.deal_from_stock()

        logger.debug("Dealt a row, %d cards left in stock", self._board.stock_size)
        self.events.emit_new(EventType.STOCK_DEALT, stock=self._board.stock_size)
        for index in complete_runs(self._board):
            self._announce_completion(index)
        self._check_win()

    def move(self, from_column: int, run_length: int, to_column: int) -> MoveOutcome:
        """
        Move the top ``run_length`` cards of one column onto another.

        Args:
            from_column: Source column index
            run_length: Number of cards to move
            to_column: Destination column index

        Returns:
            What changed, including the affected columns

        Raises:
            ColumnOutOfRange: An index is outside 0-9
            InvalidSequence: The cards are not a movable run
            InvalidDestination: The run cannot go on the destination
        """
        try:
            self._require_started()
            validate_move(self._board, from_column, run_length, to_column)
        except EngineError as exc:
            self._reject("move", exc)
            raise

        self.history.push(self._board)
        outcome = apply_move(self._board, from_column, run_length, to_column)

        logger.debug("Moved %s", outcome.move)
        self.events.emit_new(
            EventType.CARDS_MOVED,
            source=from_column,
            destination=to_column,
            count=run_length,
        )
        if outcome.revealed:
            self.events.emit_new(EventType.CARD_REVEALED, column=from_column)
        if outcome.completed:
            self._announce_completion(to_column)
        self._check_win()
        return outcome

    def play(self, move: Move) -> MoveOutcome:
        """Apply a move descriptor, such as the one from a hint."""
        return self.move(move.source, move.run_length, move.destination)

    def undo(self) -> None:
        """
        Restore the board to before the last deal or move.

        Raises:
            NothingToUndo: No command has been played since the deal
        """
        try:
            self._require_started()
            state = self.history.pop()
        except EngineError as exc:
            self._reject("undo", exc)
            raise

        self._board = Board.from_snapshot(state, self.rules)
        if self.phase == GamePhase.WON and not self._board.is_won:
            self.begin_play()

        logger.debug("Undo, %d step(s) left", len(self.history))
        self.events.emit_new(EventType.MOVE_UNDONE, remaining=len(self.history))

    def hint(self) -> MoveSuggestion | None:
        """Suggest a legal move without changing anything."""
        suggestion = find_hint(self._board)
        if suggestion is not None:
            self.events.emit_new(
                EventType.HINT_GIVEN,
                source=suggestion.move.source,
                destination=suggestion.move.destination,
                count=suggestion.move.run_length,
                category=suggestion.category.name,
            )
        return suggestion

    # Internals

    def _require_started(self) -> GameState:
        if self._initial is None or self.phase == GamePhase.NOT_STARTED:
            raise GameNotStarted("Start a new game first")
        return self._initial

    def _reject(self, command: str, error: EngineError) -> None:
        """Publish a rejected command before the error propagates."""
        logger.debug("Rejected %s: %s", command, error)
        self.events.emit_new(
            EventType.INVALID_ACTION,
            command=command,
            error=error.code,
            message=str(error),
        )

    def _announce_completion(self, column: int) -> None:
        logger.debug("Run completed in column %d", column)
        self.events.emit_new(
            EventType.RUN_COMPLETED,
            column=column,
            foundations=self._board.filled_foundations,
        )

    def _check_win(self) -> None:
        if self.phase == GamePhase.PLAYING and self._board.is_won:
            self.declare_win()
            self.events.emit_new(EventType.GAME_WON)
