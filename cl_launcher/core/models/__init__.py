"""Domain models."""

from .command import Command, parse_tags, sorted_by_alias

__all__ = ["Command", "parse_tags", "sorted_by_alias"]
