"""Command sharing feature.

Public API:
    export_commands(session, path, namespaces) -> Write commands to a TOML file
    import_commands(session, path, namespaces) -> Merge commands from a TOML file
"""

from .workflow import ShareWorkflow, export_commands, import_commands

__all__ = ["ShareWorkflow", "export_commands", "import_commands"]
