"""Session store protocol.

Defines the interface for the per-identity minimum-interval gate.
"""

from typing import Protocol, runtime_checkable

from gemstone_gateway.entities import SessionDecision, SessionRecord


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for session gate stores."""

    @property
    def min_interval(self) -> float:
        """Return the minimum seconds between admitted requests."""
        ...

    def admit(self, identity: str) -> SessionDecision:
        """Admit a request if the minimum interval has elapsed.

        Stale records are swept before the identity is evaluated. A
        throttled request leaves the identity's record untouched.

        Args:
            identity: The caller-distinguishing key

        Returns:
            SessionDecision
        """
        ...

    def get(self, identity: str) -> SessionRecord | None:
        """Return a copy of the identity's record, if any."""
        ...

    def reset(self, identity: str) -> None:
        """Remove the identity's record."""
        ...
