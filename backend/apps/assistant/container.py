from __future__ import annotations

from .services import AdviceService, default_client_factory


def build_advice_service() -> AdviceService:
    return AdviceService(client_factory=default_client_factory)
