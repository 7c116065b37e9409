"""Request validation and the abuse deny-list."""

import re

from gemstone_gateway.errors import ContentRejectedError, ValidationFailedError

# Only clearly malicious or abusive content is blocked; off-topic questions
# are redirected by the prompt instead.
DENY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:hack|crack|exploit|inject|breach)", re.IGNORECASE),
    re.compile(r"\b(?:virus|malware|phishing|spam)", re.IGNORECASE),
    re.compile(r"\b(?:password|login|admin|database|sql)", re.IGNORECASE),
    re.compile(r"\b(?:porn|adult|explicit|sexual|nsfw)", re.IGNORECASE),
    re.compile(r"\b(?:fuck|shit|bitch|asshole)\b", re.IGNORECASE),
    re.compile(r"<\s*script|javascript:|\bscript\b", re.IGNORECASE),
)


def validate_request(text: object, topic: object, max_length: int, allowed_topic: str) -> str:
    """Validate the raw chat input.

    Args:
        text: Message supplied by the caller
        topic: Topic marker supplied by the caller
        max_length: Maximum message length in characters
        allowed_topic: The single supported topic marker

    Returns:
        The message text

    Raises:
        ValidationFailedError: If the message is missing, blank, too long,
            or the topic marker is wrong
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationFailedError("Message is required and must be a string.")

    if len(text) > max_length:
        raise ValidationFailedError(
            f"Message too long. Maximum {max_length} characters allowed."
        )

    if topic != allowed_topic:
        raise ValidationFailedError(
            "Invalid topic. Only gemstone recommendations are allowed."
        )

    return text


def is_allowed(text: str) -> bool:
    """Check text against the deny-list."""
    return not any(pattern.search(text) for pattern in DENY_PATTERNS)


def check_content(text: str) -> None:
    """Raise ContentRejectedError if text matches the deny-list."""
    if not is_allowed(text):
        raise ContentRejectedError()
