"""Game lifecycle phases."""

from enum import Enum, auto


class GamePhase(Enum):
    """
    Engine lifecycle states.

    Flow: NOT_STARTED → PLAYING → WON, with undo taking WON back to PLAYING
    and a new game or restart returning to PLAYING from anywhere.
    """

    # No deal yet
    NOT_STARTED = auto()

    # Cards on the table, commands accepted
    PLAYING = auto()

    # Every foundation filled
    WON = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def state_name(self) -> str:
        """Return the state name used by the lifecycle machine."""
        return self.name.lower()


# Valid phase transitions
VALID_TRANSITIONS: dict[GamePhase, list[GamePhase]] = {
    GamePhase.NOT_STARTED: [GamePhase.PLAYING],
    GamePhase.PLAYING: [GamePhase.PLAYING, GamePhase.WON],
    GamePhase.WON: [GamePhase.PLAYING],
}


def is_valid_transition(from_phase: GamePhase, to_phase: GamePhase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])


def sources_for(to_phase: GamePhase) -> list[str]:
    """Return the machine state names allowed to move into ``to_phase``."""
    return [p.state_name for p in GamePhase if is_valid_transition(p, to_phase)]
