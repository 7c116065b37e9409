"""Response cache entry domain entity."""

from dataclasses import dataclass

from .catalog import CandidateItem


@dataclass(frozen=True)
class CacheEntryEntity:
    """A previously generated response kept by the response cache.

    Attributes:
        response_text: The generated one-line reply
        candidate_items: Candidates that were shown with the reply
        stored_at: When the entry was stored (clock seconds)
    """

    response_text: str
    candidate_items: tuple[CandidateItem, ...]
    stored_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        """Check whether the entry is still within its time-to-live."""
        return now - self.stored_at < ttl
