"""Structured generation: prompt + schema in, normalized JSON object out."""

from __future__ import annotations

import asyncio
import enum
import json
import re
from dataclasses import dataclass
from typing import Any

from . import config
from .descriptor import SchemaDescriptor
from .errors import ResponseParseError, StructuredGenerationFailed
from .logger import get_logger
from .normalize import clean_and_validate
from .providers import AIResponse, GenerationRequest, ProviderAdapter

log = get_logger()

_FENCED_BLOCK = re.compile(r"^```(?:json|JSON)?\s*(?P<body>.*?)\s*```$", re.DOTALL)


class AttemptState(enum.Enum):
    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RetryConfig:
    """Attempt bound and linear backoff for structured generation."""

    max_attempts: int = config.STRUCTURED_MAX_ATTEMPTS
    base_delay_s: float = config.RETRY_BASE_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            object.__setattr__(self, "max_attempts", 1)
        if self.base_delay_s < 0:
            object.__setattr__(self, "base_delay_s", 0.0)

    def delay_after(self, attempt: int) -> float:
        return attempt * self.base_delay_s


def parse_json(text: str) -> Any:
    """Parse JSON from a model response, tolerating a surrounding code fence."""
    text = (text or "").strip()
    if not text:
        raise ResponseParseError("AI did not return any content")

    match = _FENCED_BLOCK.match(text)
    if match:
        text = match.group("body")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        log.debug(f"Unparseable response: {text[:200]}")
        raise ResponseParseError(f"Failed to parse AI response as JSON: {e}") from e


async def _sleep_with_backoff(*, delay_s: float, attempt: int, max_attempts: int) -> None:
    log.warning(
        f"⚠️ Structured generation attempt {attempt}/{max_attempts} failed; "
        f"retrying in {delay_s:.1f}s"
    )
    await asyncio.sleep(delay_s)


async def generate_content(
    adapter: ProviderAdapter, prompt: str, system_prompt: str | None = None
) -> AIResponse:
    """Free-text generation. One call, errors propagate."""
    return await adapter.generate(GenerationRequest(prompt=prompt, system_prompt=system_prompt))


async def generate_structured_content(
    adapter: ProviderAdapter,
    prompt: str,
    schema: SchemaDescriptor | dict[str, Any],
    system_prompt: str | None = None,
    *,
    retry: RetryConfig | None = None,
) -> dict[str, Any]:
    """Ask ``adapter`` for an object matching ``schema``.

    Adapter errors, unparseable text and non-object JSON all count as a failed
    attempt. Attempts are separated by ``attempt * base_delay_s`` seconds.
    Raises ``StructuredGenerationFailed`` once every attempt has failed.
    """

    if isinstance(schema, dict):
        schema = SchemaDescriptor.from_json_schema(schema)
    retry = retry or RetryConfig()
    request = GenerationRequest(prompt=prompt, system_prompt=system_prompt, response_schema=schema)

    last_error: Exception | None = None
    result: dict[str, Any] = {}
    attempt = 1
    state = AttemptState.ATTEMPTING

    while state in (AttemptState.ATTEMPTING, AttemptState.BACKOFF):
        log.debug(f"{adapter.name}: {state.value} ({attempt}/{retry.max_attempts})")

        if state is AttemptState.BACKOFF:
            await _sleep_with_backoff(
                delay_s=retry.delay_after(attempt),
                attempt=attempt,
                max_attempts=retry.max_attempts,
            )
            attempt += 1
            state = AttemptState.ATTEMPTING
            continue

        try:
            resp = await adapter.generate_structured(request)
            result = clean_and_validate(parse_json(resp.content))
        except Exception as e:  # noqa: BLE001
            last_error = e
            log.error(f"❌ Attempt {attempt}/{retry.max_attempts} failed: {e}")
            state = AttemptState.FAILED if attempt >= retry.max_attempts else AttemptState.BACKOFF
        else:
            state = AttemptState.SUCCEEDED

    log.debug(f"{adapter.name}: {state.value} after {attempt} attempt(s)")
    if state is AttemptState.FAILED:
        raise StructuredGenerationFailed(retry.max_attempts, last_error)

    problems = schema.mismatches(result)
    if problems:
        log.warning(f"Response deviates from schema: {'; '.join(problems[:5])}")
    return result
