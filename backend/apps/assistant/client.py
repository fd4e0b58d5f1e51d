from typing import Any, Optional

import httpx

from apps.api.exceptions import UpstreamError
from apps.common import get_logger
from .config import GeminiConfig
from .prompts import build_payload

logger = get_logger(__name__).bind(component="assistant", layer="client")


class GeminiClient:
    """
    Minimal client for the Gemini ``generateContent`` REST endpoint.

    Failures of any kind surface as ``UpstreamError``; neither the credential
    nor the upstream body is ever logged or propagated.
    """

    def __init__(self, config: GeminiConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.transport = transport
        self.logger = logger.bind(model=config.model)

    def _headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key,
        }

    def generate(self, prompt: str) -> str:
        try:
            with httpx.Client(transport=self.transport, timeout=self.config.timeout) as client:
                response = client.post(
                    self.config.endpoint, headers=self._headers(), json=build_payload(prompt)
                )
        except httpx.HTTPError as exc:
            self.logger.error("Upstream request failed", error_type=exc.__class__.__name__)
            raise UpstreamError() from exc

        if response.status_code >= 400:
            self.logger.error("Upstream returned error status", status=response.status_code)
            raise UpstreamError()
        try:
            data = response.json()
        except ValueError as exc:
            self.logger.error("Upstream returned undecodable body", status=response.status_code)
            raise UpstreamError() from exc

        text = self._extract_text(data)
        if not text:
            self.logger.warning("Upstream returned no candidate text")
            raise UpstreamError()
        self.logger.debug("Upstream returned candidate text", length=len(text))
        return text

    @staticmethod
    def _extract_text(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            return None
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) and text.strip() else None
