"""Command search feature.

Public API:
    search_commands(session, query, namespace, limit) -> Rank and display matches
    SearchWorkflow -> Full search orchestration
"""

from .workflow import SearchWorkflow, search_commands

__all__ = ["SearchWorkflow", "search_commands"]
