from abc import ABC, abstractmethod


class KeyValueStorePort(ABC):
    """Durable local storage: string keys to string values."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is not an error."""
        raise NotImplementedError
