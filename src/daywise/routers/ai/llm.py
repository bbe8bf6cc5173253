from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from daywise.core.config import Settings
from daywise.core.exceptions import NetworkFailure, UpstreamError

logger = logging.getLogger(__name__)


class OllamaGateway:
    """Thin async client for a local Ollama runtime.

    One attempt per call: no retries and no client-side timeout. ``transport``
    exists so tests can plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        structured: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.structured = structured
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "OllamaGateway":
        return cls(
            base_url=settings.ollama_url,
            model=settings.ollama_model,
            temperature=settings.ollama_temperature,
            max_tokens=settings.ollama_max_tokens,
            structured=settings.ollama_structured_output,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=None, transport=self._transport)

    def _payload(self, prompt: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": self.temperature, "max_tokens": self.max_tokens},
        }
        if self.structured:
            body["format"] = "json"
        return body

    async def check_health(self) -> bool:
        try:
            async with self._client() as client:
                res = await client.get("/api/tags")
            return res.is_success
        except Exception as exc:
            logger.info("Ollama health probe failed: %s", exc)
            return False

    async def generate(self, prompt: str) -> str:
        try:
            async with self._client() as client:
                res = await client.post("/api/generate", json=self._payload(prompt))
        except httpx.RequestError as exc:
            raise NetworkFailure(f"Ollama unreachable at {self.base_url}: {exc}") from exc

        if not res.is_success:
            raise UpstreamError(
                f"Ollama API error: {res.status_code} {res.reason_phrase}",
                status_code=res.status_code,
            )
        try:
            outer = res.json()
        except ValueError as exc:
            raise UpstreamError("Ollama returned a non-JSON body", status_code=res.status_code) from exc
        if not isinstance(outer, dict):
            raise UpstreamError("Unexpected JSON shape from Ollama", status_code=res.status_code)
        return str(outer.get("response") or "")
