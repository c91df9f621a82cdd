"""
Intcode VM - I/O Channel

The only path between a program and its driver:

  driver ── send() ──> [input FIFO] ── receive() ──> INPUT instruction
  driver <── drain() ── [output buffer] <── emit() ── OUTPUT instruction

Nothing here blocks. An INPUT instruction that finds the FIFO empty
suspends the machine instead (see Computer.run); the driver calls send()
and runs again. Output stays buffered until the driver drains it, so a
driver may leave it to accumulate across several run() calls.
"""

from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple


class IOChannel:
    """Input queue + output buffer owned by one Computer."""

    def __init__(self):
        self._inputs: Deque[int] = deque()
        self._outputs: List[int] = []

    # --- Driver side ---

    def send(self, value: int):
        """Append one value to the back of the input queue."""
        self._inputs.append(value)

    def send_all(self, values: Iterable[int]):
        for value in values:
            self._inputs.append(value)

    @property
    def outputs(self) -> Tuple[int, ...]:
        """Undrained output, oldest first."""
        return tuple(self._outputs)

    def drain(self) -> List[int]:
        """Remove and return all buffered output in emission order."""
        drained, self._outputs = self._outputs, []
        return drained

    @property
    def pending(self) -> int:
        """Number of queued inputs not yet consumed."""
        return len(self._inputs)

    # --- Program side ---

    def receive(self) -> Optional[int]:
        """Pop the oldest input, or None if the queue is empty."""
        return self._inputs.popleft() if self._inputs else None

    def emit(self, value: int):
        self._outputs.append(value)

    def __len__(self) -> int:
        return len(self._outputs)
