"""Fuzzy ranking of stored commands."""

from .filter import (
    ALL_NAMESPACES,
    field_spans,
    filter_commands,
    lookup_string,
    rank_commands,
    resolve_candidates,
    search,
    split_match_indices,
)
from .fuzzy import FuzzyMatch, fuzzy_match, fuzzy_score

__all__ = [
    "ALL_NAMESPACES",
    "FuzzyMatch",
    "field_spans",
    "filter_commands",
    "fuzzy_match",
    "fuzzy_score",
    "lookup_string",
    "rank_commands",
    "resolve_candidates",
    "search",
    "split_match_indices",
]
