"""Feature modules wired to the CLI router."""
