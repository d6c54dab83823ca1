"""Tests for the SpiderGame engine."""

from random import Random

import pytest
from transitions import MachineError

from spider.cards import SuitMode
from spider.config import EngineConfig, GameConfig
from spider.errors import (
    BlockedDeal,
    ColumnOutOfRange,
    EmptyStock,
    GameNotStarted,
    InvalidDestination,
    InvalidSequence,
    NothingToUndo,
)
from spider.game import EventEmitter, EventType, GamePhase, SpiderGame
from spider.game.state import VALID_TRANSITIONS, is_valid_transition
from spider.hints import HintCategory


def _event_types(game):
    return [e.event_type for e in game.events.history]


class TestLifecycle:
    """Tests for new game, restart and phases."""

    def test_starts_not_started(self):
        """Test a fresh engine has no game."""
        game = SpiderGame()
        assert game.phase == GamePhase.NOT_STARTED
        assert not game.can_deal
        assert game.hint() is None

    def test_commands_before_new_game(self):
        """Test play commands are refused until a game is dealt."""
        game = SpiderGame()
        with pytest.raises(GameNotStarted):
            game.deal_from_stock()
        with pytest.raises(GameNotStarted):
            game.move(0, 1, 1)
        with pytest.raises(GameNotStarted):
            game.undo()
        with pytest.raises(GameNotStarted):
            game.restart()
        assert _event_types(game) == [EventType.INVALID_ACTION] * 4

    def test_new_game(self, game):
        """Test a new game deals the opening layout."""
        assert game.phase == GamePhase.PLAYING
        assert [len(c) for c in game.columns] == [6, 6, 6, 6, 5, 5, 5, 5, 5, 5]
        assert game.stock_size == 50
        assert game.foundation_count == 0
        assert not game.can_undo
        assert not game.is_won()
        assert _event_types(game) == [EventType.GAME_STARTED]

    def test_seeded_game_is_deterministic(self):
        """Test the same seed deals the same board."""
        a = SpiderGame()
        b = SpiderGame()
        assert a.new_game(SuitMode.FOUR, seed=2024) == b.new_game(SuitMode.FOUR, seed=2024)
        assert a.new_game(SuitMode.FOUR, seed=1) != b.new_game(SuitMode.FOUR, seed=2)

    def test_new_game_switches_mode(self, game):
        """Test new_game can change the suit mode."""
        state = game.new_game(SuitMode.TWO, seed=3)
        assert game.mode == SuitMode.TWO
        assert state.suit_mode == SuitMode.TWO
        assert game.new_game(seed=3).suit_mode == SuitMode.TWO

    def test_new_game_clears_history(self, game):
        """Test history does not survive a new game."""
        game.deal_from_stock()
        assert game.can_undo
        game.new_game()
        assert not game.can_undo

    def test_restart_deals_fresh_game(self):
        """Test restart reshuffles in the current mode and drops history."""
        game = SpiderGame()
        opening = game.new_game(SuitMode.TWO, seed=5)
        game.deal_from_stock()

        restarted = game.restart(rng=Random(6))

        assert restarted != opening
        assert restarted.suit_mode == SuitMode.TWO
        game.board.check_invariants()
        assert game.snapshot() == restarted
        assert game.stock_size == 50
        assert not game.can_undo
        assert game.phase == GamePhase.PLAYING
        assert _event_types(game)[-1] == EventType.GAME_RESTARTED

    def test_restart_matches_seeded_new_game(self):
        """Test restart shuffles the same way new_game does."""
        a = SpiderGame()
        a.new_game(SuitMode.FOUR, seed=1)
        b = SpiderGame()
        expected = b.new_game(SuitMode.FOUR, seed=9)
        assert a.restart(rng=Random(9)) == expected

    def test_replay(self, game):
        """Test replay returns to the opening layout of the same deal."""
        opening = game.snapshot()
        game.deal_from_stock()
        assert game.replay() == opening
        assert game.snapshot() == opening
        assert not game.can_undo
        assert game.events.history[-1].data["replay"] is True

    def test_replay_after_restart(self, game):
        """Test replay uses the layout dealt by the last restart."""
        restarted = game.restart(rng=Random(3))
        game.deal_from_stock()
        assert game.replay() == restarted

    def test_board_is_a_copy(self, game):
        """Test the board accessor cannot touch the live game."""
        board = game.board
        board.deal_from_stock()
        assert game.stock_size == 50

    def test_valid_transitions(self):
        """Test the documented phase edges."""
        assert is_valid_transition(GamePhase.NOT_STARTED, GamePhase.PLAYING)
        assert is_valid_transition(GamePhase.WON, GamePhase.PLAYING)
        assert not is_valid_transition(GamePhase.NOT_STARTED, GamePhase.WON)

    def test_machine_edges_match_table(self):
        """Test the lifecycle machine allows exactly the documented edges."""
        machine_edges = {
            (source, t["dest"]) for t in SpiderGame.TRANSITIONS for source in t["source"]
        }
        table_edges = {
            (a.state_name, b.state_name) for a, targets in VALID_TRANSITIONS.items() for b in targets
        }
        assert machine_edges == table_edges

    def test_machine_refuses_undocumented_edge(self):
        """Test a win cannot be declared before a game starts."""
        game = SpiderGame()
        with pytest.raises(MachineError):
            game.declare_win()
        assert game.phase == GamePhase.NOT_STARTED


class TestDealCommand:
    """Tests for dealing from the stock through the engine."""

    def test_deal_and_undo(self, game):
        """Test a deal can be undone exactly."""
        before = game.snapshot()
        game.deal_from_stock()
        assert game.stock_size == 40
        game.undo()
        assert game.snapshot() == before
        assert EventType.MOVE_UNDONE in _event_types(game)

    def test_deal_until_stock_empty(self, game):
        """Test five deals empty the stock and a sixth fails."""
        for _ in range(5):
            if game.foundation_count:
                break
            game.deal_from_stock()
        if game.foundation_count == 0:
            assert game.stock_size == 0
            with pytest.raises(EmptyStock):
                game.deal_from_stock()

    def test_blocked_deal_is_reported(self, make_board):
        """Test a blocked deal raises, emits and changes nothing."""
        board = make_board(["KS"], stock=["AS"] * 10)
        game = SpiderGame()
        game.resume(board.snapshot())
        before = game.snapshot()

        with pytest.raises(BlockedDeal):
            game.deal_from_stock()

        assert game.snapshot() == before
        assert not game.can_undo
        last = game.events.history[-1]
        assert last.event_type == EventType.INVALID_ACTION
        assert last.data["error"] == "BlockedDeal"
        assert last.data["command"] == "deal"

    def test_deal_completes_run(self, make_board, full_run):
        """Test a dealt card can finish a run."""
        board = make_board(
            full_run("S", 13, 2),
            *[["5S"]] * 9,
            stock=["9S"] * 9 + ["AS"],
        )
        game = SpiderGame()
        game.resume(board.snapshot())
        game.deal_from_stock()
        assert game.foundation_count == 1
        assert game.columns[0] == ()
        assert EventType.RUN_COMPLETED in _event_types(game)


class TestMoveCommand:
    """Tests for moving cards through the engine."""

    def test_worked_example(self, make_board):
        """Test move, rejected move and undo on a known layout."""
        board = make_board(
            ["-3D", "7C"],
            ["-4C", "9H"],
            ["-4D", "9S"],
            ["-2C", "QD"],
            ["-5C", "KH"],
            ["-6C", "10S"],
            *[["AC"]] * 4,
            mode=SuitMode.TWO,
        )
        game = SpiderGame()
        game.resume(board.snapshot())
        before = game.snapshot()

        outcome = game.move(2, 1, 5)
        assert outcome.columns == (2, 5)
        assert outcome.revealed
        assert [str(c) for c in game.columns[5]] == ["??", "10♠", "9♠"]

        with pytest.raises(InvalidDestination):
            game.move(5, 1, 1)

        game.undo()
        assert game.columns[2] == before.columns[2]
        assert game.columns[5] == before.columns[5]
        assert game.snapshot() == before

    def test_move_events(self, make_board):
        """Test a move publishes the move and the reveal."""
        board = make_board(["-3D", "9S"], ["10H"], *[["AC"]] * 8)
        game = SpiderGame()
        game.resume(board.snapshot())
        received = []
        game.subscribe(received.append, EventType.CARDS_MOVED)

        game.move(0, 1, 1)

        assert len(received) == 1
        assert received[0].data == {"source": 0, "destination": 1, "count": 1}
        assert _event_types(game)[-1] == EventType.CARD_REVEALED

    def test_rejected_moves_leave_board(self, make_board):
        """Test failed moves raise typed errors and change nothing."""
        board = make_board(["9S", "8H"], ["9H"], *[["AC"]] * 8)
        game = SpiderGame()
        game.resume(board.snapshot())
        before = game.snapshot()

        with pytest.raises(ColumnOutOfRange):
            game.move(0, 1, 10)
        with pytest.raises(InvalidSequence):
            game.move(0, 2, 1)
        with pytest.raises(InvalidDestination):
            game.move(1, 1, 0)

        assert game.snapshot() == before
        assert not game.can_undo
        assert [e.data["error"] for e in game.events.history[-3:]] == [
            "ColumnOutOfRange",
            "InvalidSequence",
            "InvalidDestination",
        ]

    def test_undo_with_nothing(self, game):
        """Test undo right after the deal is refused."""
        with pytest.raises(NothingToUndo):
            game.undo()

    def test_win_and_undo(self, make_board, full_run):
        """Test completing the last run wins and undo reopens the game."""
        board = make_board(
            full_run("S", 13, 2),
            ["AS"],
            foundations=[True] * 7 + [False],
        )
        game = SpiderGame()
        game.resume(board.snapshot())

        game.move(1, 1, 0)

        assert game.is_won()
        assert game.phase == GamePhase.WON
        assert game.foundation_count == 8
        assert _event_types(game)[-3:] == [
            EventType.CARDS_MOVED,
            EventType.RUN_COMPLETED,
            EventType.GAME_WON,
        ]

        game.undo()
        assert not game.is_won()
        assert game.phase == GamePhase.PLAYING


class TestHintCommand:
    """Tests for hints through the engine."""

    def test_hint_can_be_played(self, make_board):
        """Test a hint is a legal move the engine accepts."""
        board = make_board(["-3D", "9S"], ["10H"], *[["AC"]] * 8)
        game = SpiderGame()
        game.resume(board.snapshot())

        suggestion = game.hint()

        assert suggestion.category == HintCategory.REVEAL_CARD
        assert _event_types(game)[-1] == EventType.HINT_GIVEN
        game.play(suggestion.move)
        assert game.columns[1][-1].rank.value == 9

    def test_hint_on_dealt_game_is_legal(self, any_mode_game):
        """Test hints on real deals are always accepted."""
        suggestion = any_mode_game.hint()
        if suggestion is not None:
            any_mode_game.play(suggestion.move)
            assert any_mode_game.can_undo

    def test_is_stuck(self, make_board):
        """Test a board with no move and no stock is stuck."""
        board = make_board(*[["5S"]] * 10)
        game = SpiderGame()
        game.resume(board.snapshot())
        assert game.hint() is None
        assert game.is_stuck()


class TestEventEmitter:
    """Tests for the event channel."""

    def test_catch_all_and_unsubscribe(self):
        """Test catch-all handlers see everything until removed."""
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)

        emitter.emit_new(EventType.STOCK_DEALT, stock=40)
        emitter.unsubscribe(received.append)
        emitter.emit_new(EventType.STOCK_DEALT, stock=30)

        assert [e.data["stock"] for e in received] == [40]
        assert len(emitter.history) == 2

    def test_history_can_be_disabled(self):
        """Test an emitter without history still notifies handlers."""
        emitter = EventEmitter(keep_history=False)
        received = []
        emitter.subscribe(received.append, EventType.GAME_WON)

        emitter.emit_new(EventType.GAME_WON)

        assert len(received) == 1
        assert emitter.history == []

    def test_clear_history(self, game):
        """Test the engine's event history can be cleared."""
        game.events.clear_history()
        game.deal_from_stock()
        assert _event_types(game) == [EventType.STOCK_DEALT]


class TestFromConfig:
    """Tests for building an engine from configuration."""

    def test_from_config(self):
        """Test configuration picks mode and seed."""
        cfg = EngineConfig(game=GameConfig(suit_mode=SuitMode.TWO, seed=99))
        a = SpiderGame.from_config(cfg)
        b = SpiderGame.from_config(cfg)
        assert a.mode == SuitMode.TWO
        assert a.snapshot() == b.snapshot()
        assert a.phase == GamePhase.PLAYING
