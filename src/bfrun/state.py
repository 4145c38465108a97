from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class MachineState:
    ip: int = 0  # Next instruction; leaving [0, len(program)) halts
    dp: int = 0  # Current cell
    steps: int = 0
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
