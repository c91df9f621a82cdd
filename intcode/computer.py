"""
Intcode VM - Execution Engine

Integrates:
  - Memory (mem/memory.py)
  - Instruction decoder (cpu/decoder.py)
  - Operation table (cpu/ops.py)
  - I/O channel (periph/channel.py)

Execution model, repeated until run() returns:
  1. Fetch the instruction cell at the instruction pointer
  2. Decode opcode + parameter modes (fresh every time, programs may
     rewrite their own code)
  3. Look up the operation, read `arity` raw parameters after the cell
  4. Execute the handler
  5. Advance the pointer by 1 + arity unless the handler jumped or
     suspended

run() returns:
  - FINISHED           the program executed HALT (99); terminal
  - WAITING_FOR_INPUT  an INPUT instruction found the queue empty; the
                       pointer still addresses that INPUT, so the next
                       run() retries it

Any other condition (unknown opcode, bad mode, immediate write target,
negative address, cell overflow) raises an IntcodeError and leaves the
machine unusable.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from .config import NOUN_ADDRESS, OPCODE_RADIX, VERB_ADDRESS
from .cpu.decoder import Parameter, ParameterMode, decode, mode_for
from .cpu.ops import lookup
from .errors import InvalidWriteTarget, ReenterAfterFinished
from .loader import parse_program
from .mem.memory import Memory, check_cell
from .periph.channel import IOChannel
from .status import ExecutionStatus

logger = logging.getLogger(__name__)


class Computer:
    """Intcode stored-program computer with suspend/resume I/O.

    Usage:
        computer = Computer.from_program("3,0,4,0,99")
        computer.send_input(42)
        computer.run().assert_finished()
        print(computer.outputs())  # (42,)

    Interactive driver:
        while computer.run() is ExecutionStatus.WAITING_FOR_INPUT:
            reply = decide(computer.drain_outputs())
            computer.send_input(reply)
    """

    def __init__(self, cells: Iterable[int]):
        self.mem = Memory(cells)
        self.channel = IOChannel()
        self._ip = 0
        self._relative_base = 0
        self._terminated = False

    @classmethod
    def from_program(cls, text: str) -> 'Computer':
        """Build a machine from comma-separated program text."""
        return cls(parse_program(text))

    # ══════════════════════════════════════════════
    # Memory patching / inspection
    # ══════════════════════════════════════════════

    def write_memory(self, address: int, value: int):
        """Patch one cell directly, normally before the first run()."""
        logger.debug("Patch [%d] = %d", address, value)
        self.mem.write(address, value)

    def fixup(self, noun: int, verb: int):
        """Patch the noun (address 1) and verb (address 2) cells."""
        self.write_memory(NOUN_ADDRESS, noun)
        self.write_memory(VERB_ADDRESS, verb)

    def peek_memory(self, address: int) -> int:
        """Read one cell without side effects."""
        return self.mem.read(address)

    def memory(self) -> List[int]:
        """Copy of the dense segment (the program image as modified so far)."""
        return self.mem.snapshot()

    @property
    def instruction_pointer(self) -> int:
        return self._ip

    @property
    def relative_base(self) -> int:
        return self._relative_base

    @property
    def terminated(self) -> bool:
        return self._terminated

    # ══════════════════════════════════════════════
    # I/O
    # ══════════════════════════════════════════════

    def send_input(self, value: int):
        """Queue one input value. Legal before the first run or while suspended."""
        self.channel.send(check_cell(value))

    def send_inputs(self, values: Iterable[int]):
        self.channel.send_all(check_cell(v) for v in values)

    @property
    def pending_inputs(self) -> int:
        return self.channel.pending

    def outputs(self) -> Tuple[int, ...]:
        """All output emitted and not yet drained."""
        return self.channel.outputs

    def drain_outputs(self) -> List[int]:
        """Remove and return buffered output in emission order."""
        return self.channel.drain()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def run(self) -> ExecutionStatus:
        """Execute until HALT or until INPUT finds the queue empty."""
        if self._terminated:
            raise ReenterAfterFinished()

        while True:
            status = self._step()
            if status is ExecutionStatus.FINISHED:
                logger.debug("Halted at %d with %d output(s) buffered",
                             self._ip, len(self.channel))
                return status
            if status is ExecutionStatus.WAITING_FOR_INPUT:
                logger.debug("Waiting for input at %d", self._ip)
                return status

    def _step(self) -> Optional[ExecutionStatus]:
        """Execute one instruction. Returns a status if run() should return."""
        ip = self._ip
        opcode, modes = decode(self.mem.read(ip), ip)
        operation = lookup(opcode, ip)

        params = [
            Parameter(mode_for(modes, i), self.mem.read(ip + 1 + i))
            for i in range(operation.arity)
        ]

        result = operation.execute(self, params)

        if result.status is ExecutionStatus.FINISHED:
            self._terminated = True
            return result.status
        if result.status is not None:
            return result.status

        if result.jump is not None:
            self._ip = result.jump
        else:
            self._ip = ip + 1 + operation.arity
        return None

    # ══════════════════════════════════════════════
    # Operand access (used by cpu/ops.py handlers)
    # ══════════════════════════════════════════════

    def read_param(self, param: Parameter) -> int:
        """Effective value of a parameter."""
        if param.mode is ParameterMode.IMMEDIATE:
            return param.value
        return self.mem.read(self._address_of(param))

    def write_param(self, param: Parameter, value: int):
        """Store value at the address a parameter names."""
        if param.mode is ParameterMode.IMMEDIATE:
            raise InvalidWriteTarget(self._ip, self.mem.read(self._ip) % OPCODE_RADIX)
        self.mem.write(self._address_of(param), value)

    def adjust_relative_base(self, offset: int):
        self._relative_base = check_cell(self._relative_base + offset)

    def _address_of(self, param: Parameter) -> int:
        if param.mode is ParameterMode.RELATIVE:
            return self._relative_base + param.value
        return param.value

    def __repr__(self) -> str:
        return (f"Computer(ip={self._ip}, base={self._relative_base}, "
                f"terminated={self._terminated}, {self.mem!r})")
