"""Ranks stored commands against a query, inside a namespace scope."""

from typing import Dict, List, Optional, Tuple

from cl_launcher.core.models import Command
from cl_launcher.core.store import NamespaceCache
from cl_launcher.utils.logging import get_logger

from .fuzzy import FuzzyMatch, fuzzy_match

logger = get_logger(__name__)

# Scope value meaning "every namespace"
ALL_NAMESPACES: Optional[str] = None

# Matches scoring at or below this are dropped
MIN_SCORE = 1


LOOKUP_FIELDS = ("alias", "namespace", "description", "tags", "command")


def _lookup_parts(command: Command) -> Tuple[str, ...]:
    return (
        command.alias,
        command.namespace,
        command.description_text(),
        command.tags_as_string(),
        command.command,
    )


def lookup_string(command: Command) -> str:
    """Text the query is matched against."""
    return " ".join(_lookup_parts(command)).strip()


def field_spans(command: Command) -> Dict[str, Tuple[int, int]]:
    """Start and end offset of each field inside ``lookup_string(command)``."""
    spans = {}
    start = 0
    for name, value in zip(LOOKUP_FIELDS, _lookup_parts(command)):
        spans[name] = (start, start + len(value))
        start += len(value) + 1
    return spans


def split_match_indices(command: Command, indices: List[int]) -> Dict[str, List[int]]:
    """Matched lookup string positions, re-based on the field they fall in."""
    return {
        name: [i - start for i in indices if start <= i < end]
        for name, (start, end) in field_spans(command).items()
    }


def resolve_candidates(cache: NamespaceCache, scope: Optional[str]) -> List[Command]:
    """Commands visible in ``scope``.

    The all-namespaces scope on an empty cache yields the demo placeholder,
    so the interactive views always have something to show.
    """
    if scope is ALL_NAMESPACES:
        commands = cache.all_commands()
        return commands or [Command.placeholder()]
    return cache.get(scope)


def rank_commands(
    scope: Optional[str], query: str, candidates: List[Command]
) -> List[Tuple[Command, FuzzyMatch]]:
    """Score and sort ``candidates``, best first, with their match details."""
    if scope is not ALL_NAMESPACES:
        candidates = [c for c in candidates if c.namespace == scope]

    if not query:
        return [(command, FuzzyMatch(score=0)) for command in candidates]

    ranked = []
    for command in candidates:
        match = fuzzy_match(lookup_string(command), query)
        if match is not None and match.score > MIN_SCORE:
            ranked.append((command, match))

    # sorted() is stable, equal scores keep their candidate order
    ranked = sorted(ranked, key=lambda item: item[1].score, reverse=True)
    logger.debug(f"query '{query}' matched {len(ranked)} of {len(candidates)} commands")
    return ranked


def filter_commands(scope: Optional[str], query: str, candidates: List[Command]) -> List[Command]:
    return [command for command, _ in rank_commands(scope, query, candidates)]


def search(cache: NamespaceCache, scope: Optional[str], query: str) -> List[Command]:
    """Resolve candidates for ``scope`` and filter them with ``query``."""
    return filter_commands(scope, query, resolve_candidates(cache, scope))
