from .base import LLMProvider
from .factory import create_llm_provider
from .models import (
    EmptyCandidate,
    GenerationConfig,
    HttpError,
    MalformedResponse,
    ProviderMessage,
    ProviderResult,
    Success,
)
from .providers import FALLBACK_REPLY, GeminiProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "EmptyCandidate",
    "GenerationConfig",
    "HttpError",
    "MalformedResponse",
    "ProviderMessage",
    "ProviderResult",
    "Success",
    "FALLBACK_REPLY",
    "GeminiProvider",
]
