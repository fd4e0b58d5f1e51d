from __future__ import annotations

from typing import Any, Callable, Dict, Protocol, Union

from apps.common import get_logger
from .client import GeminiClient
from .commands import AdviceRequest
from .config import GeminiConfig
from .dtos import AdviceResponseDTO
from .obfuscation import obfuscate
from .prompts import build_prompt

logger = get_logger(__name__).bind(component="assistant", layer="service")


class TextGeneratorProtocol(Protocol):
    def generate(self, prompt: str) -> str:
        ...


def default_client_factory() -> TextGeneratorProtocol:
    return GeminiClient(GeminiConfig.from_env())


class AdviceService:
    """Turns symptom text into home-remedy advice. Nothing is retained between calls."""

    def __init__(self, client_factory: Callable[[], TextGeneratorProtocol] = default_client_factory):
        self.client_factory = client_factory
        self.logger = logger.bind(service="AdviceService")

    def get_advice(self, request: Union[AdviceRequest, Dict[str, Any]]) -> AdviceResponseDTO:
        if not isinstance(request, AdviceRequest):
            request = AdviceRequest.from_raw(request)
        prompt = build_prompt(request.symptom_text)
        # Resolving the client checks the credential before any upstream traffic.
        client = self.client_factory()
        self.logger.info(
            "Requesting advice",
            symptom_length=len(request.symptom_text),
            obfuscate=request.obfuscation_key is not None,
        )
        text = client.generate(prompt)
        if request.obfuscation_key is None:
            return AdviceResponseDTO(text=text, obfuscated=False)
        return AdviceResponseDTO(
            text=obfuscate(text, request.obfuscation_key), obfuscated=True
        )
