"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class UnauthenticatedError(InterfaceError):
    """Raised when a mutation arrives without a valid identity."""

    def __init__(self, action: str):
        super().__init__(f"Authentication required to {action}")
