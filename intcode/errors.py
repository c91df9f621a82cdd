"""
Intcode VM - Exception Taxonomy

Every fatal condition the machine can hit has its own exception class so
drivers can tell a bad program from a bad driver. None of them are
recoverable: the machine is left in whatever state it had when the error
was raised and must not be run again.

    IntcodeError
    ├── MalformedProgram       bad token in program text
    ├── UnknownOpcode          opcode missing from the operation table
    ├── InvalidParameterMode   mode digit outside {0, 1, 2}
    ├── InvalidWriteTarget     write through an Immediate parameter
    ├── InvalidAddress         negative memory address
    ├── CellOverflow           value outside the signed 64-bit cell range
    ├── ReenterAfterFinished   run() after the program halted
    └── StatusMismatch         driver expected a different ExecutionStatus
"""

from typing import Optional


class IntcodeError(Exception):
    """Base class for all Intcode VM errors."""
    pass


class MalformedProgram(IntcodeError):
    """Raised when program text contains a token that is not a cell."""
    def __init__(self, message: str, token: str = "", index: Optional[int] = None):
        self.token = token
        self.index = index
        if index is not None:
            message = f"Token {index} ({token!r}): {message}"
        super().__init__(message)


class UnknownOpcode(IntcodeError):
    """Raised when the instruction cell holds an opcode with no operation."""
    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at address {address}" if address is not None else ""
        super().__init__(f"Unknown opcode {opcode}{where}")


class InvalidParameterMode(IntcodeError):
    """Raised when a mode digit is not 0 (Position), 1 (Immediate) or 2 (Relative)."""
    def __init__(self, digit: int, raw: int):
        self.digit = digit
        self.raw = raw
        super().__init__(f"Invalid parameter mode {digit} in instruction {raw}")


class InvalidWriteTarget(IntcodeError):
    """Raised when an instruction tries to write through an Immediate parameter."""
    def __init__(self, address: int, opcode: Optional[int] = None):
        self.address = address
        self.opcode = opcode
        op = f", opcode {opcode}" if opcode is not None else ""
        super().__init__(
            f"Cannot write to an immediate parameter (instruction at address {address}{op})")


class InvalidAddress(IntcodeError):
    """Raised on a read or write of a negative address."""
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Invalid memory address {address}")


class CellOverflow(IntcodeError):
    """Raised when a value does not fit in a signed 64-bit cell."""
    def __init__(self, value: int, address: Optional[int] = None):
        self.value = value
        self.address = address
        where = f" at address {address}" if address is not None else ""
        super().__init__(f"Value {value} does not fit in a 64-bit cell{where}")


class ReenterAfterFinished(IntcodeError):
    """Raised when run() is called on a machine that already halted."""
    def __init__(self):
        super().__init__("Cannot run once finished")


class StatusMismatch(IntcodeError):
    """Raised by the ExecutionStatus assertion helpers."""
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected status to be {expected.name}, actually got: {actual.name}")
