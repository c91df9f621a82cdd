from .channel import IOChannel

__all__ = ['IOChannel']
