from .gemini import FALLBACK_REPLY, GeminiProvider

__all__ = ["FALLBACK_REPLY", "GeminiProvider"]
