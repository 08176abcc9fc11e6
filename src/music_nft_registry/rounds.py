from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from algosdk.v2client.algod import AlgodClient


class HeightSource(Protocol):
    """Monotonic integer marker stamped into `created_at` / `updated_at`."""

    def __call__(self) -> int: ...


@dataclass(slots=True)
class ManualHeight:
    """Height source advanced explicitly by the host."""

    current: int = 0

    def __call__(self) -> int:
        return self.current

    def advance(self, rounds: int = 1) -> int:
        if rounds < 0:
            raise ValueError("rounds must be non-negative")
        self.current += rounds
        return self.current


@dataclass(slots=True)
class AlgodRoundSource:
    """
    Use the latest confirmed round reported by Algod as the height marker.
    """

    algod: AlgodClient

    def __call__(self) -> int:
        resp = self.algod.status()
        if not isinstance(resp, Mapping) or "last-round" not in resp:
            raise RuntimeError("Unexpected algod response shape for status")
        return int(resp["last-round"])
