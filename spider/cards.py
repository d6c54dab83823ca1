"""Card and suit-mode classes - immutable card representations."""

from dataclasses import dataclass, replace
from enum import Enum, auto


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, Ace low."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 1 < self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    def follows(self, other: "Rank") -> bool:
        """Check if this rank sits exactly one below ``other``."""
        return self.value == other.value - 1


class SuitMode(Enum):
    """Difficulty levels, named by how many suits are in play."""

    ONE = 1
    TWO = 2
    FOUR = 4

    @property
    def suits(self) -> tuple[Suit, ...]:
        """Return the suits used by this mode."""
        return {
            SuitMode.ONE: (Suit.SPADES,),
            SuitMode.TWO: (Suit.SPADES, Suit.HEARTS),
            SuitMode.FOUR: (Suit.SPADES, Suit.HEARTS, Suit.CLUBS, Suit.DIAMONDS),
        }[self]

    @property
    def copies_per_suit(self) -> int:
        """Return how many full 13-card suits are packed per suit."""
        return 8 // self.value

    @classmethod
    def parse(cls, value: "str | int | SuitMode") -> "SuitMode":
        """Create a suit mode from ``1``, ``"2"``, ``"four"`` and the like."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        names = {"one": cls.ONE, "two": cls.TWO, "four": cls.FOUR}
        if text in names:
            return names[text]
        try:
            return cls(int(text))
        except ValueError:
            raise ValueError(f"Invalid suit mode: {value!r}") from None

    def __str__(self) -> str:
        return f"{self.value}-suit"


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    ``uid`` tells apart the duplicate cards of the packed decks; it takes
    part in equality so two boards only compare equal card-for-card.
    """

    suit: Suit
    rank: Rank
    face_up: bool = False
    uid: int = 0

    def __str__(self) -> str:
        if not self.face_up:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        state = "up" if self.face_up else "down"
        return f"Card({self.rank.name}, {self.suit.name}, {state}, #{self.uid})"

    def turned_up(self) -> "Card":
        """Return this card face-up."""
        if self.face_up:
            return self
        return replace(self, face_up=True)

    def turned_down(self) -> "Card":
        """Return this card face-down."""
        if not self.face_up:
            return self
        return replace(self, face_up=False)

    def continues_run(self, below: "Card") -> bool:
        """Check if this card can sit on ``below`` inside a movable run."""
        return self.suit == below.suit and self.rank.follows(below.rank)

    @classmethod
    def from_string(cls, s: str, face_up: bool = True, uid: int = 0) -> "Card":
        """Create a card from a string like 'A♠', '9S', 'Kh', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "A": Rank.ACE,
            "1": Rank.ACE,
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(suit_map[suit_str], rank_map[rank_str], face_up, uid)
