from .decoder import ParameterMode, Parameter, decode, mode_for
from .ops import Operation, StepResult, OPERATIONS, lookup

__all__ = [
    'ParameterMode', 'Parameter', 'decode', 'mode_for',
    'Operation', 'StepResult', 'OPERATIONS', 'lookup',
]
