"""
Intcode VM
==========
A small stored-program virtual machine for Intcode programs: signed
integer cells, an opcode-based instruction set with Position / Immediate /
Relative addressing, growable memory, and cooperative suspend/resume I/O.

Architecture:
    ┌──────────────┐    ┌──────────┐    ┌──────────────┐    ┌────────────┐
    │ Program text │───>│  Loader  │───>│    Memory    │<──>│  Computer  │
    │ "1,0,0,3,99" │    │ (cells)  │    │ dense+sparse │    │ fetch/exec │
    └──────────────┘    └──────────┘    └──────────────┘    └─────┬──────┘
                                                                  │
                          ┌───────────┐    ┌───────────┐    ┌─────┴──────┐
                          │  Decoder  │───>│ Operation │    │ IOChannel  │
                          │ op, modes │    │   table   │    │ in / out   │
                          └───────────┘    └───────────┘    └────────────┘

    - loader.py:          comma-separated text -> list of cells
    - mem/memory.py:      dense list for the program, dict above it
    - cpu/decoder.py:     instruction cell -> (opcode, parameter modes)
    - cpu/ops.py:         opcode -> (name, arity, handler), built once
    - periph/channel.py:  input FIFO + drainable output buffer
    - computer.py:        run() until HALT or until INPUT starves

Drivers construct a Computer, optionally patch memory and queue input,
then call run() repeatedly, draining output and sending input between
calls.
"""

__version__ = "1.0.0"

from .computer import Computer
from .status import ExecutionStatus
from .loader import parse_program
from .errors import (
    IntcodeError, MalformedProgram, UnknownOpcode, InvalidParameterMode,
    InvalidWriteTarget, InvalidAddress, CellOverflow, ReenterAfterFinished,
    StatusMismatch,
)

__all__ = [
    'Computer', 'ExecutionStatus', 'parse_program',
    'IntcodeError', 'MalformedProgram', 'UnknownOpcode', 'InvalidParameterMode',
    'InvalidWriteTarget', 'InvalidAddress', 'CellOverflow', 'ReenterAfterFinished',
    'StatusMismatch',
]
