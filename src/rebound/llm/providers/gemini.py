"""Google Gemini provider implementation.

Uses the official Google GenAI SDK for async, single-shot completions.
Reference: https://github.com/googleapis/python-genai

The SDK issues one POST to ``{base_url}/v1beta/models/{model}:generateContent``
carrying ``systemInstruction``, ``contents`` and ``generationConfig``.
"""

import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from ...errors import ConfigurationError, ProviderError
from ..base import LLMProvider
from ..models import (
    EmptyCandidate,
    GenerationConfig,
    HttpError,
    MalformedResponse,
    ProviderMessage,
    ProviderResult,
    Success,
)

logger = logging.getLogger(__name__)

# Returned when the first candidate carries no usable text
FALLBACK_REPLY = "I'm sorry, I couldn't generate a response."

GENERIC_ERROR = "The assistant service returned an error. Please try again."


class GeminiProvider(LLMProvider):
    """Google Gemini provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization (deferred until the first request,
      so a missing key surfaces as ConfigurationError instead of a crash)
    - Message and generation-config format conversion
    - Decoding responses into a ProviderResult exactly once
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.5-flash",
        base_url: str | None = None,
        client: genai.Client | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Model name (gemini-2.5-flash, gemini-2.5-pro, ...)
            base_url: Optional endpoint override
            client: Pre-built client (mainly for tests)
            **client_kwargs: Additional kwargs for Client
        """
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._client_kwargs = client_kwargs
        self._client = client

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    def _get_client(self) -> genai.Client:
        if self._client is not None:
            return self._client

        if not self._api_key:
            raise ConfigurationError(
                "No API key configured. Set GEMINI_API_KEY in your environment "
                "or .env file to enable replies."
            )

        http_options = types.HttpOptions(base_url=self._base_url) if self._base_url else None
        self._client = genai.Client(
            api_key=self._api_key,
            http_options=http_options,
            **self._client_kwargs
        )
        return self._client

    def _convert_messages(self, messages: list[ProviderMessage]) -> list[types.Content]:
        return [
            types.Content(role=msg.role, parts=[types.Part(text=msg.text)])
            for msg in messages
        ]

    def _build_config(
        self,
        system_instruction: str,
        generation_config: GenerationConfig,
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=generation_config.temperature,
            top_p=generation_config.top_p,
            max_output_tokens=generation_config.max_output_tokens,
        )

    def _decode(self, response: Any) -> ProviderResult:
        """Decode a GenerateContentResponse into a ProviderResult.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Success with the joined, trimmed text of the first candidate
            (possibly empty), EmptyCandidate when there is no candidate,
            or MalformedResponse when the shape is unexpected
        """
        try:
            candidates = response.candidates or []
            if not candidates:
                reason = None
                feedback = response.prompt_feedback
                if feedback is not None and feedback.block_reason is not None:
                    block_reason = getattr(feedback.block_reason, "value", feedback.block_reason)
                    reason = f"The request was blocked by the provider ({block_reason})."
                return EmptyCandidate(reason=reason)

            candidate = candidates[0]
            content = candidate.content
            if content is None and candidate.finish_reason is None:
                return MalformedResponse(detail="First candidate has no content and no finish reason")
            parts = content.parts if content is not None and content.parts else []
            texts = [part.text for part in parts if part.text]
            return Success(text="".join(texts).strip())
        except (AttributeError, TypeError) as e:
            return MalformedResponse(detail=str(e))

    async def _request(
        self,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
    ) -> ProviderResult:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=contents,
                config=config
            )
        except errors.APIError as e:
            return HttpError(status=e.code, message=e.message)
        except httpx.HTTPError as e:
            logger.warning("Network error talking to Gemini: %s", e)
            raise ProviderError(f"Could not reach the assistant service: {e}") from e
        except ValueError as e:
            # Unparseable JSON or a body that fails SDK validation
            return MalformedResponse(detail=str(e))

        return self._decode(response)

    async def generate(
        self,
        contents: list[ProviderMessage],
        system_instruction: str,
        generation_config: GenerationConfig,
    ) -> str:
        """Generate the next reply using Google Gemini.

        Args:
            contents: Windowed conversation context
            system_instruction: Persona and safety instruction
            generation_config: Sampling parameters

        Returns:
            Reply text, or FALLBACK_REPLY when the candidate has no text

        Raises:
            ConfigurationError: If no API key is configured
            ProviderError: On network, HTTP or response-format failures
        """
        config = self._build_config(system_instruction, generation_config)
        result = await self._request(self._convert_messages(contents), config)

        if isinstance(result, Success):
            return result.text or FALLBACK_REPLY

        if isinstance(result, HttpError):
            message = result.message or (
                f"Request failed with HTTP status {result.status}." if result.status else GENERIC_ERROR
            )
            raise ProviderError(message, status=result.status)

        if isinstance(result, EmptyCandidate):
            raise ProviderError(result.reason or "The assistant returned no answer.")

        logger.warning("Malformed Gemini response: %s", result.detail)
        raise ProviderError("The assistant service sent a response that could not be read.")

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        self._client = None
