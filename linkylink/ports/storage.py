from typing import Protocol


class ClientStoragePort(Protocol):
    """Durable key/value storage on the client (browser storage, a file, memory)."""

    def get(self, key: str) -> str | None:
        """Return the stored string, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None:
        """Remove the key. Removing an absent key is not an error."""
        ...
