"""Opener rotation adapters - keep generated messages from reusing openers."""

from mirror_api.adapters.opener_history.base import AbstractOpenerRotator
from mirror_api.adapters.opener_history.in_memory import InMemoryOpenerRotator

__all__ = [
    "AbstractOpenerRotator",
    "InMemoryOpenerRotator",
]
