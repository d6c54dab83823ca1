"""Tests for snapshot export and import."""

import json

import pytest
from pydantic import ValidationError

from spider.cards import Card, SuitMode
from spider.game import SpiderGame
from spider.schemas import CardModel, GameStateModel, dump_state, load_state


class TestCardModel:
    """Tests for CardModel."""

    def test_from_card(self):
        """Test engine cards map onto enum names and rank numbers."""
        model = CardModel.from_card(Card.from_string("QH", uid=7))
        assert model.suit == "HEARTS"
        assert model.rank == 12
        assert model.face_up is True
        assert model.uid == 7
        assert model.to_card() == Card.from_string("QH", uid=7)

    def test_rank_out_of_range(self):
        """Test ranks outside 1-13 are rejected."""
        with pytest.raises(ValidationError):
            CardModel(suit="SPADES", rank=14)

    def test_unknown_suit(self):
        """Test suits must be one of the four names."""
        with pytest.raises(ValidationError):
            CardModel(suit="STARS", rank=1)


class TestGameStateModel:
    """Tests for GameStateModel and the JSON helpers."""

    @pytest.mark.parametrize("mode", list(SuitMode), ids=str)
    def test_dump_and_load(self, mode):
        """Test a dealt game survives export and import."""
        game = SpiderGame()
        state = game.new_game(mode, seed=11)
        assert load_state(dump_state(state)) == state

    def test_resume_from_export(self, game):
        """Test an exported game can be continued by a new engine."""
        game.deal_from_stock()
        blob = dump_state(game.snapshot())

        other = SpiderGame()
        other.resume(load_state(blob))

        assert other.snapshot() == game.snapshot()
        assert other.stock_size == 40
        assert not other.can_undo

    def test_json_shape(self, game):
        """Test the exported document is plain JSON."""
        data = json.loads(dump_state(game.snapshot()))
        assert data["version"] == 1
        assert data["suit_mode"] == 1
        assert len(data["columns"]) == 10
        assert len(data["stock"]) == 50
        assert data["foundations"] == [False] * 8

    def test_wrong_card_total(self, game):
        """Test a snapshot missing cards is rejected."""
        data = json.loads(dump_state(game.snapshot()))
        data["stock"].pop()
        with pytest.raises(ValidationError):
            load_state(json.dumps(data))

    def test_wrong_column_count(self, game):
        """Test a snapshot must have ten columns."""
        data = json.loads(dump_state(game.snapshot()))
        data["columns"].append([])
        with pytest.raises(ValidationError):
            GameStateModel.model_validate(data)

    def test_bad_suit_mode(self, game):
        """Test only 1, 2 and 4 suit modes load."""
        data = json.loads(dump_state(game.snapshot()))
        data["suit_mode"] = 3
        with pytest.raises(ValidationError):
            load_state(json.dumps(data))

    def test_unknown_version(self, game):
        """Test a snapshot from another schema version is refused."""
        data = json.loads(dump_state(game.snapshot()))
        data["version"] = 2
        with pytest.raises(ValidationError):
            load_state(json.dumps(data))
