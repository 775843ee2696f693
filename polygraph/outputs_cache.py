"""Maps output parameters to the memory addresses that will hold their values."""

from __future__ import annotations

from dataclasses import dataclass, field

from polygraph.graph_types import OutputId
from polygraph.poly_asm import MemAddr


@dataclass
class OutputsCache:
    """Records, during compilation, where each node output is stored.

    Addresses carry their own value type, so a single mapping is enough.
    """

    _addresses: dict[OutputId, MemAddr] = field(default_factory=dict)

    def insert(self, param_id: OutputId, addr: MemAddr) -> None:
        self._addresses[param_id] = addr

    def get(self, param_id: OutputId) -> MemAddr | None:
        return self._addresses.get(param_id)

    def __contains__(self, param_id: object) -> bool:
        return param_id in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)