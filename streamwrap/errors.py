import io


class InvalidInput(ValueError):
    """Raised for arguments that can never be registered or resolved."""


class NotFound(FileNotFoundError, KeyError):
    """No handle is registered under the requested identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"No resource registered for id: '{identifier}'")
        self.identifier = identifier

    def __str__(self) -> str:
        return self.args[0]


class NoRealPath(io.UnsupportedOperation):
    """The handle is not backed by a location on the filesystem."""
