"""
Intcode VM - Operation Table

Maps each opcode to (name, arity, handler). The table is built once at
import time and never mutated; it is the only state shared between
Computer instances.

Handler signature: handler(computer, params) -> StepResult
  - params has exactly `arity` entries
  - StepResult.status is set when the step ends the current run() call
  - StepResult.jump is set when the handler chose the next instruction
    pointer; otherwise the engine advances past the instruction

Adding an opcode means adding a handler and a table entry; the engine
does not change.
"""

from typing import Callable, Dict, NamedTuple, Optional, Sequence

from ..errors import UnknownOpcode
from ..status import ExecutionStatus
from .decoder import Parameter


class StepResult(NamedTuple):
    status: Optional[ExecutionStatus] = None
    jump: Optional[int] = None


CONTINUE = StepResult()


class Operation(NamedTuple):
    name: str
    arity: int
    execute: Callable[..., StepResult]


# ──────────────────────────────────────────────
# Handlers
# ──────────────────────────────────────────────

def _op_add(computer, params: Sequence[Parameter]) -> StepResult:
    a, b, dst = params
    computer.write_param(dst, computer.read_param(a) + computer.read_param(b))
    return CONTINUE


def _op_mul(computer, params: Sequence[Parameter]) -> StepResult:
    a, b, dst = params
    computer.write_param(dst, computer.read_param(a) * computer.read_param(b))
    return CONTINUE


def _op_input(computer, params: Sequence[Parameter]) -> StepResult:
    """Store the next queued input, or suspend without consuming anything."""
    dst, = params
    value = computer.channel.receive()
    if value is None:
        return StepResult(status=ExecutionStatus.WAITING_FOR_INPUT)
    computer.write_param(dst, value)
    return CONTINUE


def _op_output(computer, params: Sequence[Parameter]) -> StepResult:
    src, = params
    computer.channel.emit(computer.read_param(src))
    return CONTINUE


def _op_jump_if_true(computer, params: Sequence[Parameter]) -> StepResult:
    predicate, target = params
    if computer.read_param(predicate) != 0:
        return StepResult(jump=computer.read_param(target))
    return CONTINUE


def _op_jump_if_false(computer, params: Sequence[Parameter]) -> StepResult:
    predicate, target = params
    if computer.read_param(predicate) == 0:
        return StepResult(jump=computer.read_param(target))
    return CONTINUE


def _op_less_than(computer, params: Sequence[Parameter]) -> StepResult:
    a, b, dst = params
    computer.write_param(dst, int(computer.read_param(a) < computer.read_param(b)))
    return CONTINUE


def _op_equals(computer, params: Sequence[Parameter]) -> StepResult:
    a, b, dst = params
    computer.write_param(dst, int(computer.read_param(a) == computer.read_param(b)))
    return CONTINUE


def _op_adjust_relative_base(computer, params: Sequence[Parameter]) -> StepResult:
    offset, = params
    computer.adjust_relative_base(computer.read_param(offset))
    return CONTINUE


def _op_halt(computer, params: Sequence[Parameter]) -> StepResult:
    return StepResult(status=ExecutionStatus.FINISHED)


# ──────────────────────────────────────────────
# Table
# ──────────────────────────────────────────────

OPERATIONS: Dict[int, Operation] = {
    1:  Operation('ADD',                  3, _op_add),
    2:  Operation('MUL',                  3, _op_mul),
    3:  Operation('INPUT',                1, _op_input),
    4:  Operation('OUTPUT',               1, _op_output),
    5:  Operation('JUMP_IF_TRUE',         2, _op_jump_if_true),
    6:  Operation('JUMP_IF_FALSE',        2, _op_jump_if_false),
    7:  Operation('LESS_THAN',            3, _op_less_than),
    8:  Operation('EQUALS',               3, _op_equals),
    9:  Operation('ADJUST_RELATIVE_BASE', 1, _op_adjust_relative_base),
    99: Operation('HALT',                 0, _op_halt),
}


def lookup(opcode: int, address: Optional[int] = None) -> Operation:
    """Return the operation for opcode, or raise UnknownOpcode."""
    try:
        return OPERATIONS[opcode]
    except KeyError:
        raise UnknownOpcode(opcode, address) from None
