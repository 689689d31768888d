"""Storage contract shared by the assessment repository and preference stores."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPersistenceBackend(Protocol):
    """String values under the fixed ``pedss_*`` keys.

    ``load`` raises ``KeyError`` for a key that was never written.  I/O
    failures surface as ``OSError``; callers translate them to
    ``StorageError``.
    """

    def save(self, key: str, data: str) -> None: ...

    def load(self, key: str) -> str: ...

    def delete(self, key: str) -> None:
        """Remove *key*. Deleting an absent key is not an error."""
        ...
