"""
Intcode VM - Instruction Decoder

An instruction cell packs the opcode and the parameter modes as decimal
digits:

    ABCDE
     1002
    DE  - two-digit opcode      (02 = MUL)
    C   - mode of parameter 1   (0 = Position)
    B   - mode of parameter 2   (1 = Immediate)
    A   - mode of parameter 3   (0 = Position, leading zero omitted)

Addressing modes:
  POSITION   0  raw value is the address
  IMMEDIATE  1  raw value is the value (read-only)
  RELATIVE   2  raw value + relative base is the address

Missing leading digits mean Position. Every digit present must be a
valid mode, even past the operation's arity.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from ..config import OPCODE_RADIX, MODE_RADIX
from ..errors import InvalidParameterMode, UnknownOpcode


class ParameterMode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


@dataclass(frozen=True)
class Parameter:
    """One operand following an instruction cell."""
    mode: ParameterMode
    value: int


def decode(raw: int, address: Optional[int] = None) -> Tuple[int, List[ParameterMode]]:
    """Split an instruction cell into (opcode, modes).

    Modes are listed for parameter 1, 2, ... in order and only cover the
    digits actually present; use mode_for() to read past the end.
    """
    if raw < 0:
        raise UnknownOpcode(raw, address)

    opcode = raw % OPCODE_RADIX
    modes = []
    rest = raw // OPCODE_RADIX
    while rest:
        digit = rest % MODE_RADIX
        try:
            modes.append(ParameterMode(digit))
        except ValueError:
            raise InvalidParameterMode(digit, raw) from None
        rest //= MODE_RADIX
    return opcode, modes


def mode_for(modes: Sequence[ParameterMode], index: int) -> ParameterMode:
    """Mode of parameter `index` (0-based), defaulting to Position."""
    if index < len(modes):
        return modes[index]
    return ParameterMode.POSITION
