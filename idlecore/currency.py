from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrencyDef:
    """Static definition of a currency."""

    id: str
    name: str = ""
    start: float = 0.0

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)
