from .memory import Memory, check_cell

__all__ = ['Memory', 'check_cell']
