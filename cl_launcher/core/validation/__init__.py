"""Domain validation utilities."""

from .command import CommandValidator

__all__ = ["CommandValidator"]
