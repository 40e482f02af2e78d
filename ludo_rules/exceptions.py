# Exception types raised by the rules engine
class LudoError(Exception):
    """Base exception for rules-engine errors."""

    pass


class IllegalMoveError(LudoError):
    """Raised when a move outside the current legal set is applied."""

    pass


class InvariantViolation(LudoError):
    """Raised when pieces or players end up in an inconsistent state."""

    pass


class ConfigurationError(LudoError, ValueError):
    """Raised when a board layout or game configuration is invalid."""

    pass
