from abc import ABC, abstractmethod
from typing import Any

from .models import GenerationConfig, ProviderMessage


class LLMProvider(ABC):
    """Abstract base class for generation providers.

    This module hides the design decision of which provider answers the chat.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Mapping every transport or response failure to ProviderError

    Providers are single-shot and stateless between calls: no streaming,
    no automatic retries.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            text = await provider.generate(contents, instruction, config)
    """

    @abstractmethod
    async def generate(
        self,
        contents: list[ProviderMessage],
        system_instruction: str,
        generation_config: GenerationConfig,
    ) -> str:
        """Generate the assistant's next reply.

        Args:
            contents: Windowed conversation context, oldest first
            system_instruction: Persona and safety instruction
            generation_config: Sampling parameters

        Returns:
            Reply text, never empty

        Raises:
            ConfigurationError: If the provider lacks a credential
            ProviderError: On network, HTTP or response-format failures
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
