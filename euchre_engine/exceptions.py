"""
Exceptions raised by the Euchre engine
"""


class EuchreError(Exception):
    """Base class for all engine errors"""


class IllegalActionError(EuchreError, ValueError):
    """
    An action was attempted that the rules or the current phase do not allow.

    The game state is left exactly as it was before the action.
    """


class InvariantError(EuchreError, RuntimeError):
    """Internal consistency failure; the game instance cannot continue"""
