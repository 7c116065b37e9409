"""Rule-based parameter extraction from free-text queries.

``extract_parameters`` is a pure, total function: the same text always
yields the same ``ExtractedParameters`` and no input raises.

Scan order is fixed and part of the behaviour:

- Budget: the keyword rule, then the currency-symbol rule, then the
  currency-word rule; the first rule that matches supplies the number.
- Category, color and occasion: vocabularies are scanned in the order
  listed below and the first term found as a substring wins.
- Purpose: every keyword is checked in order and a later keyword
  overwrites an earlier one, so "ring and necklace" yields "necklace".
"""

import re

from gemstone_gateway.entities import ExtractedParameters

_NUMBER = r"(\d+(?:,\d+)*(?:\.\d+)?)"

# a quantity of time, weight or pieces is not a price
_NOT_MONEY = (
    r"(?!\d|[.,]\d)"
    r"(?!\s*(?:days?|weeks?|months?|years?|hours?|carats?|cts?|ct|grams?|g|mm"
    r"|pieces?|pcs|stones?|options?|times?)\b)"
)

BUDGET_PATTERNS: tuple[re.Pattern[str], ...] = (
    # keyword within 20 characters before a whole number
    re.compile(
        r"\b(?:budget|price|cost|spend|afford|under|below|less than|upto|up to)\b"
        r".{0,20}?(?<![\d.,])" + _NUMBER + _NOT_MONEY,
        re.IGNORECASE,
    ),
    # currency symbol directly before the number
    re.compile(r"(?:₹|\$|\brs\.?)\s*" + _NUMBER, re.IGNORECASE),
    # currency word directly after the number
    re.compile(_NUMBER + r"\s*(?:rs|rupees|inr|dollars?)\b", re.IGNORECASE),
)

CATEGORIES: tuple[str, ...] = (
    "diamond",
    "emerald",
    "ruby",
    "sapphire",
    "pearl",
    "topaz",
    "coral",
    "opal",
    "garnet",
    "amethyst",
)

COLORS: tuple[str, ...] = (
    "red",
    "blue",
    "green",
    "yellow",
    "white",
    "black",
    "pink",
    "purple",
    "orange",
    "clear",
)

OCCASIONS: tuple[str, ...] = ("wedding", "engagement", "anniversary", "birthday", "gift")

# (keyword, label); later matches overwrite earlier ones
PURPOSE_RULES: tuple[tuple[str, str], ...] = (
    ("ring", "ring"),
    ("necklace", "necklace"),
    ("earring", "earrings"),
    ("investment", "investment"),
)


def extract_budget(text: str) -> float | None:
    """Return the budget mentioned in text, or None."""
    for pattern in BUDGET_PATTERNS:
        match = pattern.search(text)
        if match:
            return float(match.group(1).replace(",", ""))
    return None


def _first_term(text: str, vocabulary: tuple[str, ...]) -> str | None:
    for term in vocabulary:
        if term in text:
            return term
    return None


def extract_purpose(text: str) -> str | None:
    """Return the purpose label of the last matching keyword rule."""
    purpose = None
    for keyword, label in PURPOSE_RULES:
        if keyword in text:
            purpose = label
    return purpose


def extract_parameters(text: str) -> ExtractedParameters:
    """Extract budget, category, color, occasion and purpose from text.

    Args:
        text: The user's message

    Returns:
        ExtractedParameters, possibly with every field absent

    Example:
        ```python
        extract_parameters("What's a good ruby under 50000 for my wedding?")
        # ExtractedParameters(budget=50000.0, category="ruby", occasion="wedding")
        ```
    """
    lowered = (text or "").lower()
    return ExtractedParameters(
        budget=extract_budget(lowered),
        category=_first_term(lowered, CATEGORIES),
        color=_first_term(lowered, COLORS),
        occasion=_first_term(lowered, OCCASIONS),
        purpose=extract_purpose(lowered),
    )
