from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProviderMessage(BaseModel):
    """A conversation turn in the provider's wire vocabulary."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = Field(description="Provider role: 'user' or 'model'")
    text: str = Field(description="Text of the turn")


class GenerationConfig(BaseModel):
    """Sampling parameters sent with every request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0, description="Nucleus-sampling threshold")
    max_output_tokens: int = Field(default=1024, ge=1)


# Outcomes of a single request, decoded once at the client boundary


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class EmptyCandidate(BaseModel):
    """The provider answered but returned no candidate."""

    model_config = ConfigDict(frozen=True)

    reason: str | None = None


class MalformedResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    detail: str


class HttpError(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: int | None = None
    message: str | None = None


ProviderResult = Success | EmptyCandidate | MalformedResponse | HttpError
