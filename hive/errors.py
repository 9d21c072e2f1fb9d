"""Engine error types."""


class InvariantViolation(AssertionError):
    """Raised when move generation reaches an impossible internal state.

    These are defects in the engine (moving a piece from an empty cell, reading a
    fourth coordinate axis, ...), not conditions a caller can recover from.
    """
