"""Deck construction, shuffling and the opening deal."""

from random import Random

from spider.board import Board
from spider.cards import Card, Rank, SuitMode
from spider.rules import RuleSet


def build_deck(mode: SuitMode = SuitMode.ONE) -> list[Card]:
    """
    Build the 104-card Spider deck for a suit mode.

    Args:
        mode: One, two or four suits

    Returns:
        Face-down cards in construction order, with uids 0-103
    """
    mode = SuitMode.parse(mode)
    cards: list[Card] = []
    for suit in mode.suits:
        for _ in range(mode.copies_per_suit):
            for rank in Rank:
                cards.append(Card(suit, rank, face_up=False, uid=len(cards)))
    return cards


def shuffle(deck: list[Card], rng: Random | None = None) -> list[Card]:
    """Shuffle the deck in place and return it."""
    (rng or Random()).shuffle(deck)
    return deck


def deal(deck: list[Card], rules: RuleSet | None = None) -> Board:
    """
    Lay out the opening tableau.

    Cards are dealt round-robin from the front of the deck, so the first
    four columns get six cards and the rest get five. Only the last card
    dealt to each column is face-up; everything left over becomes the
    stock in deal order.

    Args:
        deck: A full deck, usually shuffled
        rules: Table rules (defaults to the standard layout)

    Returns:
        The dealt board
    """
    rules = rules or RuleSet()
    if len(deck) != rules.deck_size:
        raise ValueError(f"Deck must have {rules.deck_size} cards, got {len(deck)}")

    columns: list[list[Card]] = [[] for _ in range(rules.column_count)]
    for i, card in enumerate(deck[: rules.initial_deal]):
        columns[i % rules.column_count].append(card.turned_down())
    for column in columns:
        if column:
            column[-1] = column[-1].turned_up()

    stock = [card.turned_down() for card in deck[rules.initial_deal:]]
    return Board(columns, stock, rules=rules)


def new_board(
    mode: SuitMode = SuitMode.ONE,
    rng: Random | None = None,
    rules: RuleSet | None = None,
) -> Board:
    """Build, shuffle and deal a fresh board."""
    rules = rules or RuleSet.for_mode(mode)
    return deal(shuffle(build_deck(rules.suit_mode), rng), rules)
