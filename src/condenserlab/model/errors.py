"""Exceptions shared by the calculator, the session and the assistant gateway."""


class InvalidInput(ValueError):
    """A reading cannot be used for the resistance calculation.

    Args:
        field: Name of the offending reading field (shown to the user).
        message: Human readable explanation.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class GatewayUnavailable(RuntimeError):
    """The assistant endpoint could not be reached or returned garbage.

    Only raised inside the gateway; callers always get a fallback text instead.
    """
