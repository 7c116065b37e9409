"""Extracted query parameters entity."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ExtractedParameters:
    """Attributes recognised in a free-text query.

    All fields are optional; an all-empty instance is a valid,
    under-specified query.
    """

    budget: float | None = None
    category: str | None = None
    color: str | None = None
    occasion: str | None = None
    purpose: str | None = None

    @property
    def can_match_catalog(self) -> bool:
        """True when budget, category or color is present."""
        return self.budget is not None or bool(self.category) or bool(self.color)

    @property
    def is_empty(self) -> bool:
        """True when no attribute was recognised."""
        return not self.present()

    def present(self) -> dict[str, float | str]:
        """Return only the attributes that were recognised."""
        return {name: value for name, value in asdict(self).items() if value is not None}
