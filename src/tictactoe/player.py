"""A player seated in a room. Identified by the id of the connection that owns the seat."""

from dataclasses import dataclass, replace
from typing import Self

from src.core.shared_types import Mark


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    symbol: Mark
    is_ready: bool = False

    def with_ready(self, ready: bool) -> Self:
        return replace(self, is_ready=ready)

    def with_symbol(self, symbol: Mark) -> Self:
        return replace(self, symbol=symbol)
