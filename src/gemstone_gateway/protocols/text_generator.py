"""Upstream text generation protocol.

Defines the interface for the generative model that writes the reply.
"""

from typing import Protocol, runtime_checkable

from gemstone_gateway.entities import GenerationOptions


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for upstream text generators."""

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    def is_configured(self) -> bool:
        """Check if credentials are present (no network call)."""
        ...

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full prompt
            options: Generation budget (length, randomness, stop markers)

        Returns:
            The generated text, possibly empty

        Raises:
            UpstreamConfigError: Credentials or configuration are invalid
            UpstreamQuotaExceededError: The provider's quota is exhausted
            UpstreamTimeoutError: The provider did not answer in time
            UpstreamUnavailableError: Any other provider failure
        """
        ...
