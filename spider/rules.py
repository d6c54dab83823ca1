"""Spider Solitaire table rules."""

from dataclasses import dataclass

from spider.cards import SuitMode


@dataclass(frozen=True)
class RuleSet:
    """
    Spider table configuration.

    The layout constants of the standard two-pack game plus the suit mode
    that sets the difficulty.
    """

    # Deck configuration
    suit_mode: SuitMode = SuitMode.ONE

    # Layout
    column_count: int = 10
    foundation_count: int = 8
    initial_deal: int = 54  # cards dealt to the tableau at the start

    # A completed King-to-Ace run
    run_length: int = 13

    # Stock deals are refused while any column is empty
    block_deal_on_empty_column: bool = True

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.column_count < 1:
            raise ValueError("column_count must be at least 1")
        if self.foundation_count * self.run_length != self.deck_size:
            raise ValueError("foundation_count must account for every card")
        if not 0 < self.initial_deal <= self.deck_size:
            raise ValueError("initial_deal must be between 1 and the deck size")
        if (self.deck_size - self.initial_deal) % self.column_count != 0:
            raise ValueError("stock must deal out in whole rows")

    @property
    def deck_size(self) -> int:
        """Return the number of cards in play (two packs)."""
        return 104

    @property
    def stock_deal_size(self) -> int:
        """Return how many cards one stock deal takes."""
        return self.column_count

    @classmethod
    def one_suit(cls) -> "RuleSet":
        """Beginner rules: spades only."""
        return cls(suit_mode=SuitMode.ONE)

    @classmethod
    def two_suit(cls) -> "RuleSet":
        """Intermediate rules: spades and hearts."""
        return cls(suit_mode=SuitMode.TWO)

    @classmethod
    def four_suit(cls) -> "RuleSet":
        """Expert rules: all four suits."""
        return cls(suit_mode=SuitMode.FOUR)

    @classmethod
    def for_mode(cls, mode: SuitMode) -> "RuleSet":
        """Rules for the given suit mode."""
        return cls(suit_mode=SuitMode.parse(mode))
