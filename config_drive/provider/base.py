"""
Capability contract shared by every metadata provider.
"""

from typing import Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Provider(Protocol):
    """A source of instance user-data."""

    def describe(self) -> str:
        """Human readable identity, for logs and diagnostics."""
        ...

    def probe(self) -> bool:
        """Whether usable user-data was found."""
        ...

    def extract(self) -> Tuple[bytes, Optional[Exception]]:
        """Captured user-data and the error that prevented capture, if any.

        The error is authoritative: check it even when the bytes are non-empty.
        """
        ...
