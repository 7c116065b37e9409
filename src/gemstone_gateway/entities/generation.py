"""Upstream generation options entity."""

from dataclasses import dataclass, field

# Stop at newlines and the usual follow-up question openers
DEFAULT_STOP_SEQUENCES: tuple[str, ...] = ("\n", "\n\n", ". What", ". Could")


@dataclass(frozen=True)
class GenerationOptions:
    """Generation budget sent with every upstream call.

    Defaults keep replies short (~40 words) and focused.
    """

    max_output_tokens: int = 60
    temperature: float = 0.3
    top_p: float = 0.6
    top_k: int = 20
    stop_sequences: tuple[str, ...] = field(default=DEFAULT_STOP_SEQUENCES)
