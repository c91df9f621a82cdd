"""
Intcode VM - Execution Status

Returned by every Computer.run() call. Drivers that expect one specific
outcome should call the assert_* helpers rather than compare and carry on.
"""

from enum import Enum

from .errors import StatusMismatch


class ExecutionStatus(Enum):
    FINISHED = 'FINISHED'
    WAITING_FOR_INPUT = 'WAITING_FOR_INPUT'

    def assert_finished(self):
        if self is not ExecutionStatus.FINISHED:
            raise StatusMismatch(ExecutionStatus.FINISHED, self)

    def assert_waiting_for_input(self):
        if self is not ExecutionStatus.WAITING_FOR_INPUT:
            raise StatusMismatch(ExecutionStatus.WAITING_FOR_INPUT, self)
