from __future__ import annotations

from abc import ABC, abstractmethod

DEFAULT_KEY = "idle-template"


class SaveCipher(ABC):
    """Symmetric encode/decode step around serialized save bytes.

    This is obfuscation, not a security boundary.
    """

    @abstractmethod
    def encode(self, data: bytes) -> bytes: ...

    @abstractmethod
    def decode(self, data: bytes) -> bytes: ...


class XorSaveCipher(SaveCipher):
    """Repeating-key byte XOR. Encoding and decoding are the same operation."""

    def __init__(self, key: str | bytes = DEFAULT_KEY) -> None:
        if not key:
            raise ValueError("Key must not be empty")
        self.key = key.encode("utf-8") if isinstance(key, str) else bytes(key)

    def encode(self, data: bytes) -> bytes:
        return self._transform(data)

    def decode(self, data: bytes) -> bytes:
        return self._transform(data)

    def _transform(self, data: bytes) -> bytes:
        key = self.key
        n = len(key)
        return bytes(b ^ key[i % n] for i, b in enumerate(data))


class PlainSaveCipher(SaveCipher):
    """Identity transform, for readable saves while debugging."""

    def encode(self, data: bytes) -> bytes:
        return bytes(data)

    def decode(self, data: bytes) -> bytes:
        return bytes(data)
