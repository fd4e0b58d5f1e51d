"""
Reversible XOR + base64 obfuscation of advice text.

This is NOT encryption. Anyone holding the key (or able to guess it) recovers
the plaintext, and identical inputs always produce identical outputs. It only
keeps cleartext out of casual view in transit logs.
"""
import base64
from itertools import cycle


def _xor(data: bytes, key: bytes) -> bytes:
    return bytes(b ^ k for b, k in zip(data, cycle(key)))


def obfuscate(text: str, key: str) -> str:
    if not key:
        raise ValueError("obfuscation key must be a non-empty string")
    return base64.b64encode(_xor(text.encode("utf-8"), key.encode("utf-8"))).decode("ascii")


def deobfuscate(encoded: str, key: str) -> str:
    if not key:
        raise ValueError("obfuscation key must be a non-empty string")
    raw = base64.b64decode(encoded.encode("ascii"), validate=True)
    return _xor(raw, key.encode("utf-8")).decode("utf-8")
