from dataclasses import dataclass


@dataclass(frozen=True)
class AdviceResponseDTO:
    text: str
    obfuscated: bool
