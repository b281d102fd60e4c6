"""Provider adapters: one uniform call shape over each vendor's HTTP API.

Adapters make exactly one HTTP call per operation. Retrying is the job of
``clonability.pipeline``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from . import config
from .descriptor import SchemaDescriptor
from .errors import (
    AuthenticationError,
    ProviderUnavailable,
    RateLimited,
    UnsupportedProvider,
)
from .logger import get_logger

log = get_logger()

OPENAI_LIKE = "openai-like"
GEMINI_LIKE = "gemini-like"

PROVIDER_KINDS = {
    "openai": OPENAI_LIKE,
    "grok": OPENAI_LIKE,
    "gemini": GEMINI_LIKE,
}

CONCISE_SYSTEM_NOTE = (
    "IMPORTANT: Keep all text responses concise (max 2-3 sentences per field). "
    "Respond with valid JSON only."
)
CONCISE_PROMPT_NOTE = "Remember: Be concise. Each text field should be 2-3 sentences maximum."
CONNECTION_TEST_PROMPT = "Test connection. Respond with 'OK'."

STRUCTURED_TEMPERATURE = 0.7
STRUCTURED_MAX_TOKENS = 2000


@dataclass(frozen=True)
class ProviderCredential:
    provider: str
    api_key: str
    base_url: str | None = None
    model: str | None = None

    @property
    def provider_kind(self) -> str:
        try:
            return PROVIDER_KINDS[self.provider]
        except KeyError:
            raise UnsupportedProvider(f"Unsupported AI provider: {self.provider}") from None


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    system_prompt: str | None = None
    response_schema: SchemaDescriptor | None = None

    @property
    def structured(self) -> bool:
        return self.response_schema is not None


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int | None
    completion_tokens: int | None
    total_tokens: int | None


@dataclass(frozen=True)
class AIResponse:
    content: str
    usage: TokenUsage | None = None


def structured_system_prompt(system_prompt: str | None) -> str:
    return f"{system_prompt or ''}\n{CONCISE_SYSTEM_NOTE}".strip()


def structured_user_prompt(prompt: str, schema: SchemaDescriptor) -> str:
    return (
        f"{prompt}\n\n"
        f"Respond with a valid JSON object matching this schema:\n{schema.describe()}\n\n"
        f"{CONCISE_PROMPT_NOTE}"
    )


def _error_detail(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text.strip()[:300] or r.reason_phrase
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        return str(err.get("message") or err)
    if err:
        return str(err)
    return r.text.strip()[:300]


class ProviderAdapter:
    """Base adapter. Subclasses build the vendor payload and extract the text."""

    name = "base"
    default_model = ""
    default_base_url = ""

    def __init__(
        self,
        credential: ProviderCredential,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ):
        self.credential = credential
        self.model = credential.model or self.default_model
        self.base_url = (credential.base_url or self.default_base_url).rstrip("/")
        self._client = client
        self._timeout_s = timeout_s or config.TIMEOUT

    async def generate(self, request: GenerationRequest) -> AIResponse:
        url, headers, payload = self.build_request(request, structured=False)
        return self.parse_response(await self._post(url, headers, payload))

    async def generate_structured(self, request: GenerationRequest) -> AIResponse:
        if request.response_schema is None:
            raise ValueError("generate_structured requires a response schema")
        url, headers, payload = self.build_request(request, structured=True)
        return self.parse_response(await self._post(url, headers, payload))

    async def test_connection(self) -> bool:
        try:
            resp = await self.generate(GenerationRequest(prompt=CONNECTION_TEST_PROMPT))
        except Exception as e:  # noqa: BLE001
            log.info(f"Connection test for {self.name} failed: {e}")
            return False
        return "OK" in resp.content

    def build_request(
        self, request: GenerationRequest, *, structured: bool
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        raise NotImplementedError

    def parse_response(self, resp_json: dict[str, Any]) -> AIResponse:
        raise NotImplementedError

    async def _post(self, url: str, headers: dict[str, str], payload: dict) -> dict[str, Any]:
        try:
            if self._client is not None:
                r = await self._client.post(
                    url, headers=headers, json=payload, timeout=self._timeout_s
                )
            else:
                timeout = httpx.Timeout(self._timeout_s, read=self._timeout_s, connect=self._timeout_s)
                async with httpx.AsyncClient(timeout=timeout) as client:
                    r = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderUnavailable(
                f"{self.name} temporarily unavailable: request timed out ({e})"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailable(f"{self.name} temporarily unavailable: {e}") from e

        if r.status_code == 200:
            try:
                return r.json()
            except ValueError as e:
                raise ProviderUnavailable(
                    f"{self.name} temporarily unavailable: response body is not JSON"
                ) from e

        detail = _error_detail(r)
        log.warning(f"{self.name} API Error {r.status_code}: {detail}")
        if r.status_code in (401, 403) or "api key" in detail.lower():
            raise AuthenticationError(f"{self.name} rejected the API key: {detail}")
        if r.status_code == 429:
            raise RateLimited(f"{self.name} rate limit reached: {detail}")
        raise ProviderUnavailable(
            f"{self.name} temporarily unavailable (HTTP {r.status_code}): {detail}"
        )


class OpenAICompatibleAdapter(ProviderAdapter):
    """Chat Completions API; also serves OpenAI-compatible vendors such as xAI."""

    name = "openai"
    default_model = config.OPENAI_MODEL
    default_base_url = config.OPENAI_BASE_URL

    def build_request(self, request, *, structured):
        messages = []
        if structured:
            messages.append(
                {"role": "system", "content": structured_system_prompt(request.system_prompt)}
            )
            messages.append(
                {
                    "role": "user",
                    "content": structured_user_prompt(request.prompt, request.response_schema),
                }
            )
        else:
            if request.system_prompt:
                messages.append({"role": "system", "content": request.system_prompt})
            messages.append({"role": "user", "content": request.prompt})

        payload: dict[str, Any] = {"model": self.model, "messages": messages}
        if structured:
            payload.update(
                {
                    "response_format": {"type": "json_object"},
                    "temperature": STRUCTURED_TEMPERATURE,
                    "max_tokens": STRUCTURED_MAX_TOKENS,
                }
            )
        headers = {
            "Authorization": f"Bearer {self.credential.api_key}",
            "Content-Type": "application/json",
        }
        return f"{self.base_url}/chat/completions", headers, payload

    def parse_response(self, resp_json):
        choices = resp_json.get("choices") or []
        if not choices:
            raise ProviderUnavailable(f"{self.name} temporarily unavailable: no choices in response")
        content = (choices[0].get("message") or {}).get("content") or ""

        usage = None
        raw_usage = resp_json.get("usage")
        if isinstance(raw_usage, dict):
            usage = TokenUsage(
                prompt_tokens=raw_usage.get("prompt_tokens"),
                completion_tokens=raw_usage.get("completion_tokens"),
                total_tokens=raw_usage.get("total_tokens"),
            )
        return AIResponse(content=content, usage=usage)


class GrokAdapter(OpenAICompatibleAdapter):
    name = "grok"
    default_model = config.GROK_MODEL
    default_base_url = config.GROK_BASE_URL


class GeminiAdapter(ProviderAdapter):
    """generateContent REST API."""

    name = "gemini"
    default_model = config.GEMINI_MODEL
    default_base_url = config.GEMINI_BASE_URL

    def build_request(self, request, *, structured):
        payload: dict[str, Any] = {}
        prompt = request.prompt
        system_prompt = request.system_prompt
        if structured:
            prompt = structured_user_prompt(request.prompt, request.response_schema)
            if system_prompt:
                system_prompt = structured_system_prompt(system_prompt)
            generation_config: dict[str, Any] = {
                "responseMimeType": "application/json",
                "temperature": STRUCTURED_TEMPERATURE,
                "maxOutputTokens": STRUCTURED_MAX_TOKENS,
            }
            native_schema = request.response_schema.to_gemini_schema()
            if native_schema is not None:
                generation_config["responseSchema"] = native_schema
            payload["generationConfig"] = generation_config

        payload["contents"] = [{"role": "user", "parts": [{"text": prompt}]}]
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        headers = {
            "x-goog-api-key": self.credential.api_key,
            "Content-Type": "application/json",
        }
        return f"{self.base_url}/models/{self.model}:generateContent", headers, payload

    def parse_response(self, resp_json):
        candidates = resp_json.get("candidates") or []
        if not candidates:
            reason = (resp_json.get("promptFeedback") or {}).get("blockReason", "no candidates")
            raise ProviderUnavailable(f"{self.name} temporarily unavailable: {reason}")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        content = "".join(p.get("text", "") for p in parts if isinstance(p, dict))

        usage = None
        meta = resp_json.get("usageMetadata")
        if isinstance(meta, dict):
            usage = TokenUsage(
                prompt_tokens=meta.get("promptTokenCount"),
                completion_tokens=meta.get("candidatesTokenCount"),
                total_tokens=meta.get("totalTokenCount"),
            )
        return AIResponse(content=content, usage=usage)


ADAPTERS: dict[str, type[ProviderAdapter]] = {
    "openai": OpenAICompatibleAdapter,
    "grok": GrokAdapter,
    "gemini": GeminiAdapter,
}


def build_adapter(
    credential: ProviderCredential,
    *,
    client: httpx.AsyncClient | None = None,
    timeout_s: float | None = None,
) -> ProviderAdapter:
    """Factory for provider adapters.

    Providers:
    - openai
    - grok (OpenAI-compatible, xAI endpoint)
    - gemini
    """

    kind = credential.provider_kind
    adapter_cls = ADAPTERS[credential.provider]
    log.debug(f"Building {credential.provider} adapter ({kind})")
    return adapter_cls(credential, client=client, timeout_s=timeout_s)


def credential_for(provider: str, api_key: str | None = None) -> ProviderCredential:
    """Credential from explicit values, falling back to configured keys."""
    p = (provider or "").strip().lower()
    if p not in ADAPTERS:
        raise UnsupportedProvider(f"Unsupported AI provider: {provider}")
    return ProviderCredential(provider=p, api_key=api_key or config.api_key_for(p))
