import os
from dataclasses import dataclass

from django.conf import settings

from apps.api.exceptions import UpstreamUnavailableError

API_KEY_ENV = "GEMINI_API_KEY"


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    base_url: str
    model: str
    timeout: float

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    def __repr__(self) -> str:
        return f"GeminiConfig(base_url={self.base_url!r}, model={self.model!r}, timeout={self.timeout!r})"

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        """Read the credential from the process environment on every call."""
        api_key = (os.getenv(API_KEY_ENV) or "").strip()
        if not api_key:
            raise UpstreamUnavailableError()
        return cls(
            api_key=api_key,
            base_url=settings.GEMINI_API_BASE,
            model=settings.GEMINI_MODEL,
            timeout=float(settings.GEMINI_TIMEOUT),
        )
