"""
Intcode VM - Two-Tier Cell Memory

Memory layout:
  [0, len(program))   Dense segment, a list seeded from the program text
  [len(program), ∞)   Sparse segment, a dict; unwritten cells read as 0

Programs are small, but some of them address cells far beyond their own
length (scratch space, a heap). The dense list keeps instruction fetches
cheap; the dict means a single far write does not allocate everything
below it.

Code and data share the same cells. Programs may rewrite their own
instructions, so nothing here caches decoded values.
"""

from typing import Dict, Iterable, List

from ..config import CELL_MIN, CELL_MAX
from ..errors import InvalidAddress, CellOverflow


def check_cell(value: int, address: int = None) -> int:
    """Return value unchanged, or raise CellOverflow if it is not a 64-bit cell."""
    if not CELL_MIN <= value <= CELL_MAX:
        raise CellOverflow(value, address)
    return value


class Memory:
    """Addressable signed-integer cells: dense program image + sparse extension."""

    __slots__ = ('_dense', '_sparse')

    def __init__(self, cells: Iterable[int] = ()):
        self._dense: List[int] = [check_cell(v, i) for i, v in enumerate(cells)]
        self._sparse: Dict[int, int] = {}

    # --- Core read/write ---

    def read(self, address: int) -> int:
        """Read the cell at address. Never-written sparse cells read as 0."""
        if address < 0:
            raise InvalidAddress(address)
        if address < len(self._dense):
            return self._dense[address]
        return self._sparse.get(address, 0)

    def write(self, address: int, value: int):
        """Write a cell. Dense segment if in range, otherwise the sparse map."""
        if address < 0:
            raise InvalidAddress(address)
        check_cell(value, address)
        if address < len(self._dense):
            self._dense[address] = value
        else:
            self._sparse[address] = value

    # --- Inspection ---

    def snapshot(self) -> List[int]:
        """Copy of the dense segment (the loaded program, as modified so far)."""
        return list(self._dense)

    @property
    def sparse_size(self) -> int:
        """Number of cells written beyond the dense segment."""
        return len(self._sparse)

    def __len__(self) -> int:
        return len(self._dense)

    def __repr__(self) -> str:
        return f"Memory(dense={len(self._dense)}, sparse={len(self._sparse)})"
