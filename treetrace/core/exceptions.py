"""Custom exceptions for the tree tracing system."""


class TreeTraceException(Exception):
    """Base exception for tree-tracing errors."""
    pass


class InvalidOrderError(TreeTraceException):
    """Raised when a multiway tree is constructed with an unusable order."""

    def __init__(self, order, minimum: int):
        self.order = order
        self.minimum = minimum
        super().__init__(
            f"Tree order must be an integer >= {minimum}, got {order!r}")


class UnknownTreeTypeError(TreeTraceException):
    """Raised when a tree type name cannot be resolved."""
    pass


class CommandParseError(TreeTraceException):
    """Raised when bulk command text contains a token that is not a command."""

    def __init__(self, token: str, position: int):
        self.token = token
        self.position = position
        super().__init__(
            f"Cannot parse command {token!r} at position {position}")


class TreeInvariantError(TreeTraceException):
    """Raised when a snapshot breaks the invariants of its tree family."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
