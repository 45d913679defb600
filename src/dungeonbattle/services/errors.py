"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a party or encounter cannot be created."""


class BattleValidationError(Exception):
    """Raised when a request is rejected before it touches battle state."""


class BattleNotFoundError(BattleValidationError):
    """Raised for an unknown battle id."""


class OutOfTurnError(BattleValidationError):
    """Raised when the submitting combatant is not the current player-controlled actor."""


class MalformedActionError(BattleValidationError):
    """Raised when an action payload cannot be parsed."""


class InternalInconsistencyError(Exception):
    """Raised when battle state breaks its own invariants (e.g. no current actor)."""


class AllocationError(Exception):
    """Raised when an experience allocation is invalid; nothing is mutated."""
