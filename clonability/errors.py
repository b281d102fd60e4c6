from __future__ import annotations

from dataclasses import dataclass


class AIProviderError(RuntimeError):
    """Base error for everything raised by the analysis core."""


class AuthenticationError(AIProviderError):
    """The vendor rejected the configured API key."""


class ProviderUnavailable(AIProviderError):
    """The vendor call errored, timed out or returned nothing usable."""


class RateLimited(AIProviderError):
    """The vendor reported throttling."""


class UnsupportedProvider(AIProviderError):
    pass


class ResponseParseError(AIProviderError):
    """The model response could not be parsed as JSON."""


class InvalidResponseShape(AIProviderError):
    """The parsed response is not a JSON object."""


class StructuredGenerationFailed(AIProviderError):
    """All structured generation attempts failed."""

    def __init__(self, attempts: int, last_error: Exception | None):
        self.attempts = attempts
        self.last_error = last_error
        detail = str(last_error) if last_error else "Unknown error"
        super().__init__(
            f"Structured AI generation failed after {attempts} attempts: {detail}"
        )


@dataclass(frozen=True)
class FailureNotice:
    """User-facing description of a terminal failure."""

    title: str
    description: str
    status: int


def describe_failure(error: Exception) -> FailureNotice:
    """Map a terminal failure to the message shown to the end user.

    Matching is on the message text so vendor errors wrapped by
    ``StructuredGenerationFailed`` classify the same way as raw ones.
    """

    message = str(error) or "Failed to analyze business URL"
    low = message.lower()

    if "api key" in low:
        return FailureNotice(
            title="Invalid API key",
            description="Invalid API key. Please check your AI provider configuration.",
            status=400,
        )
    if "temporarily unavailable" in low:
        return FailureNotice(
            title="Service unavailable",
            description="AI service temporarily unavailable. Please try again in a moment.",
            status=503,
        )
    if "rate limit" in low:
        return FailureNotice(
            title="Rate limit reached",
            description="Rate limit reached. Please wait a few moments before trying again.",
            status=429,
        )
    return FailureNotice(title="Analysis failed", description=message, status=500)
