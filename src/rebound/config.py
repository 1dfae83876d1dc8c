"""Runtime configuration for rebound.

Values come from environment variables (a .env file is loaded by the CLI).
Hides the variable names and parsing rules from the rest of the package.
"""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError
from .llm.models import GenerationConfig

DEFAULT_MODEL = "gemini-2.5-flash"

# Trailing turns sent to the provider; an upper bound, not a token budget
DEFAULT_CONTEXT_WINDOW = 12

DEFAULT_HISTORY_PATH = Path("./rebound_history.db")

# Environment variable -> (section, field)
_ENV_FIELDS = {
    "GEMINI_API_KEY": (None, "api_key"),
    "GEMINI_MODEL": (None, "model"),
    "GEMINI_BASE_URL": (None, "base_url"),
    "REBOUND_CONTEXT_WINDOW": (None, "context_window"),
    "REBOUND_HISTORY_BACKEND": (None, "history_backend"),
    "REBOUND_HISTORY_PATH": (None, "history_path"),
    "REBOUND_LOG_LEVEL": (None, "log_level"),
    "REBOUND_STRICT_LOG": (None, "strict_log"),
    "REBOUND_TEMPERATURE": ("generation", "temperature"),
    "REBOUND_TOP_P": ("generation", "top_p"),
    "REBOUND_MAX_OUTPUT_TOKENS": ("generation", "max_output_tokens"),
}


class ReboundConfig(BaseModel):
    """Complete runtime configuration."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, repr=False, description="Gemini API key")
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model name")
    base_url: str | None = Field(default=None, description="Override for the provider endpoint")
    context_window: int = Field(default=DEFAULT_CONTEXT_WINDOW, ge=1)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    history_backend: str = Field(default="sqlite", description="'sqlite' or 'memory'")
    history_path: Path = Field(default=DEFAULT_HISTORY_PATH)
    log_level: str = Field(default="WARNING")
    strict_log: bool = Field(
        default=False,
        description="Raise on out-of-order timestamps instead of clamping them",
    )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ReboundConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Parsed configuration; unset or empty variables keep their defaults

        Raises:
            ConfigurationError: If a variable has an invalid value
        """
        env = os.environ if environ is None else environ
        data: dict = {}
        generation: dict = {}

        for var, (section, field) in _ENV_FIELDS.items():
            value = env.get(var)
            if not value:
                continue
            target = generation if section == "generation" else data
            target[field] = value

        if generation:
            data["generation"] = generation

        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
