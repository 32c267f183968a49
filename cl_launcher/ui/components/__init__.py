"""Reusable UI components for command display."""

from .messages import StatusMessage
from .panels import CommandPanel
from .prompts import ConfirmPrompt
from .tables import CommandTable

__all__ = [
    "CommandTable",
    "CommandPanel",
    "ConfirmPrompt",
    "StatusMessage",
]
