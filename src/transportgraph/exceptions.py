"""Custom exceptions for TransportGraph."""


class TransportGraphError(Exception):
    """Base exception for all TransportGraph errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InventoryError(TransportGraphError):
    """The NE inventory could not be fetched or read."""

    def __init__(self, source: str, details: str | None = None):
        message = f"Failed to load inventory from {source}"
        super().__init__(message, details)
        self.source = source


class ConfigError(TransportGraphError):
    """Invalid configuration file."""

    pass
