from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from apps.api.exceptions import InvalidRequestError

SYMPTOM_KEYS = ("symptoms", "symptomText", "symptom_text")
KEY_KEYS = ("obfuscationKey", "obfuscation_key")


def _first_present(payload: Dict[str, Any], keys) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


@dataclass(frozen=True)
class AdviceRequest:
    """Validated on construction, so no path reaches the upstream with bad input."""

    symptom_text: str
    obfuscation_key: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        if not isinstance(self.symptom_text, str) or not self.symptom_text.strip():
            raise InvalidRequestError(
                "Please describe your symptoms",
                details={"symptoms": ["A non-empty string is required."]},
            )
        key = self.obfuscation_key
        if key is not None and (not isinstance(key, str) or not key):
            raise InvalidRequestError(
                "Obfuscation key must be a non-empty string",
                details={"obfuscationKey": ["A non-empty string is required."]},
            )

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "AdviceRequest":
        if not isinstance(payload, dict):
            raise InvalidRequestError("Payload must be an object")
        return AdviceRequest(
            symptom_text=_first_present(payload, SYMPTOM_KEYS),
            obfuscation_key=_first_present(payload, KEY_KEYS),
        )
