"""Pytest fixtures for Spider engine tests."""

import pytest
from random import Random

from spider.board import Board
from spider.cards import Card, SuitMode
from spider.deck import build_deck, deal, shuffle
from spider.game import SpiderGame
from spider.rules import RuleSet


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def dealt_board(rng):
    """A freshly dealt one-suit board."""
    return deal(shuffle(build_deck(SuitMode.ONE), rng))


@pytest.fixture
def game():
    """A new one-suit game with a fixed seed."""
    g = SpiderGame()
    g.new_game(SuitMode.ONE, seed=42)
    return g


@pytest.fixture(params=list(SuitMode), ids=str)
def any_mode_game(request):
    """A seeded game for each suit mode."""
    g = SpiderGame()
    g.new_game(request.param, seed=7)
    return g


@pytest.fixture
def make_board():
    """
    Build a board from card strings.

    Columns are given bottom to top; missing columns are empty. A leading
    '-' marks a face-down card, e.g. ``["-KS", "9H", "8H"]``.
    """

    def parse(text: str, uid: int) -> Card:
        if text.startswith("-"):
            return Card.from_string(text[1:], face_up=False, uid=uid)
        return Card.from_string(text, face_up=True, uid=uid)

    def build(*columns, stock=(), foundations=None, mode=SuitMode.ONE):
        uid = 0
        parsed = []
        for column in columns:
            cards = []
            for text in column:
                cards.append(parse(text, uid))
                uid += 1
            parsed.append(cards)
        parsed.extend([] for _ in range(10 - len(parsed)))
        stock_cards = []
        for text in stock:
            stock_cards.append(Card.from_string(text, face_up=False, uid=uid))
            uid += 1
        return Board(parsed, stock_cards, foundations, rules=RuleSet.for_mode(mode))

    return build


@pytest.fixture
def full_run():
    """Face-up King down to Ace of one suit, as card strings."""

    def build(suit: str = "S", start: int = 13, stop: int = 1) -> list[str]:
        names = {1: "A", 11: "J", 12: "Q", 13: "K"}
        return [f"{names.get(r, r)}{suit}" for r in range(start, stop - 1, -1)]

    return build

