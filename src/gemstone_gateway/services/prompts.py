"""Prompt construction for the upstream generator.

``build_prompt`` is pure: it branches on whether catalog candidates were
found and always embeds the user's literal message, limiting the reply to
one line of at most 40 words.
"""

from collections.abc import Sequence

from gemstone_gateway.entities import CandidateItem, ExtractedParameters, PriceRange

from .extraction import CATEGORIES, extract_parameters

ASSISTANT_NAME = "Kohinoor AI"
MAX_RESPONSE_WORDS = 40

# Words that mark a message as being about gemstones or jewellery
TOPIC_TERMS: tuple[str, ...] = CATEGORIES + (
    "gem",
    "stone",
    "jewel",
    "ring",
    "necklace",
    "pendant",
    "bracelet",
    "carat",
)

OFF_TOPIC_REPLY = "Quick answer. For gemstones: What's your name, occasion, and budget?"

# Parameters collected from the user, in the order they are asked for
COLLECTION_ORDER: tuple[tuple[str, str], ...] = (
    ("name", "your name"),
    ("occasion", "the occasion and date"),
    ("budget", "your budget range"),
    ("purpose", "what it is for (ring, necklace, earrings or investment)"),
    ("color", "your preferred color"),
)


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_price(price_range: PriceRange | None, currency_symbol: str = "₹") -> str:
    """Render a price range for display.

    Both bounds give a range, only a minimum gives "min+", anything else
    is "Price on request".
    """
    if price_range is None or price_range.min is None:
        return "Price on request"

    low = f"{currency_symbol}{_format_amount(price_range.min)}"
    if price_range.max is None:
        return f"{low}+"
    return f"{low} - {currency_symbol}{_format_amount(price_range.max)}"


def format_candidates(candidates: Sequence[CandidateItem], currency_symbol: str = "₹") -> str:
    """Render candidates as "name (category) - price", comma separated."""
    return ", ".join(
        f"{item.display_name} ({item.category}) - {format_price(item.price_range, currency_symbol)}"
        for item in candidates
    )


def missing_parameters(params: ExtractedParameters) -> list[str]:
    """List the descriptions of parameters not yet supplied, in asking order.

    The user's name is never extracted, so it is always asked for.
    """
    supplied = params.present()
    return [label for field, label in COLLECTION_ORDER if field not in supplied]


def is_on_topic(text: str, params: ExtractedParameters) -> bool:
    """Judge whether a message is about gemstones or jewellery."""
    if not params.is_empty:
        return True
    lowered = text.lower()
    return any(term in lowered for term in TOPIC_TERMS)


def _join_labels(labels: list[str]) -> str:
    if len(labels) <= 1:
        return "".join(labels)
    return ", ".join(labels[:-1]) + ", and " + labels[-1]


def _candidates_prompt(text: str, candidates: Sequence[CandidateItem], currency_symbol: str) -> str:
    gem_list = format_candidates(candidates, currency_symbol)
    return (
        f'USER ASKED: "{text}"\n\n'
        f"I FOUND THESE MATCHING GEMSTONES: {gem_list}\n\n"
        f'RESPOND EXACTLY: "Perfect! I found these gems for you: {gem_list}. '
        'Click any card below to view details!"\n\n'
        f"ONE LINE ONLY, AT MOST {MAX_RESPONSE_WORDS} WORDS. NO OTHER TEXT."
    )


def _clarifying_prompt(text: str, params: ExtractedParameters) -> str:
    missing = missing_parameters(params)
    if is_on_topic(text, params):
        instruction = (
            f'- Ask for the missing details only: "What\'s {_join_labels(missing)}?"'
        )
    else:
        instruction = f'- The message is not about gemstones. Reply: "{OFF_TOPIC_REPLY}"'

    order = " -> ".join(label for _, label in COLLECTION_ORDER)
    return (
        f"You are {ASSISTANT_NAME}, a premium gemstone consultant. "
        "Ask for specific parameters systematically.\n\n"
        "RULES:\n"
        f"- ONE LINE response only, at most {MAX_RESPONSE_WORDS} words\n"
        f"{instruction}\n"
        f"- Collect in this order: {order}\n\n"
        f'USER: "{text}"\n\n'
        "RESPOND: One line asking for the missing parameters only."
    )


def build_prompt(
    text: str,
    candidates: Sequence[CandidateItem],
    params: ExtractedParameters | None = None,
    currency_symbol: str = "₹",
) -> str:
    """Build the single prompt sent to the upstream generator.

    Args:
        text: The user's original message (embedded verbatim)
        candidates: Catalog matches; empty selects the clarifying branch
        params: Parameters already extracted from text. Extracted here if None.
        currency_symbol: Symbol used when rendering prices

    Returns:
        The prompt string
    """
    if candidates:
        return _candidates_prompt(text, candidates, currency_symbol)
    if params is None:
        params = extract_parameters(text)
    return _clarifying_prompt(text, params)
