"""
Tests for fuzzy matching, ranking and the selection cursor

Tests cover:
- Subsequence scoring, bonuses and smart case
- Match positions and their mapping back to fields
- Scope handling and ranking order
- Cursor clamping and wrapping
"""
from cl_launcher.core.cursor import SelectionCursor, clamp
from cl_launcher.core.models import Command
from cl_launcher.core.search import (
    ALL_NAMESPACES,
    filter_commands,
    fuzzy_match,
    fuzzy_score,
    lookup_string,
    rank_commands,
    resolve_candidates,
    search,
    split_match_indices,
)
from cl_launcher.core.store import NamespaceCache

from .test_helpers import CommandTestHelper


def make(alias, namespace="git", command=None, **kwargs):
    return CommandTestHelper.create_command(
        alias=alias, namespace=namespace, command=command or f"run {alias}", **kwargs
    )


class TestFuzzyMatch:
    """Tests for the fuzzy scorer"""

    def test_word_starts(self):
        """Matches at word starts are found and positioned"""
        match = fuzzy_match("git fetch", "gf")
        assert match.indices == [0, 4]
        assert match.score == 51

    def test_consecutive_beats_gapped(self):
        """Adjacent matches score higher than spread out ones"""
        assert fuzzy_score("fetch", "fe") == 56
        assert fuzzy_score("f-x-e", "fe") == 51
        assert fuzzy_score("fetch", "fe") > fuzzy_score("f-x-e", "fe")

    def test_not_a_subsequence(self):
        """Out of order characters do not match"""
        assert fuzzy_match("git fetch", "fg") is None
        assert fuzzy_score("abc", "abd") is None

    def test_empty_query(self):
        """The empty query matches with a zero score"""
        match = fuzzy_match("anything", "")
        assert match.score == 0
        assert match.indices == []

    def test_smart_case(self):
        """Lowercase queries ignore case, uppercase ones do not"""
        assert fuzzy_match("Git Fetch", "gf") is not None
        assert fuzzy_match("git fetch", "GF") is None
        assert fuzzy_match("Git Fetch", "GF") is not None

    def test_indices_point_at_query_chars(self):
        """Every reported index holds the matching query character"""
        haystack = "docker compose up --build"
        match = fuzzy_match(haystack, "dcub")
        assert len(match.indices) == 4
        assert "".join(haystack[i] for i in match.indices) == "dcub"
        assert match.indices == sorted(match.indices)

    def test_prefers_boundary_alignment(self):
        """The best alignment is chosen, not the first one found"""
        match = fuzzy_match("abc_b", "b")
        assert match.indices == [4]

    def test_case_folding_keeps_positions(self):
        """Characters that lowercase to several code points keep indices aligned"""
        haystack = "echo \u0130stanbul abc"
        match = fuzzy_match(haystack, "abc")
        assert match is not None
        assert "".join(haystack[i] for i in match.indices) == "abc"
        assert fuzzy_match(haystack, "stanbul").indices[0] == 6


class TestLookupFields:
    """Tests for the lookup string and field mapping"""

    def test_lookup_string(self):
        """All fields are joined with spaces"""
        command = make("gl", description="history", tags=("log", "a"), command="git log")
        assert lookup_string(command) == "gl git history a, log git log"

    def test_lookup_string_without_optionals(self):
        """Absent fields leave empty slots"""
        assert lookup_string(make("gl", command="git log")) == "gl git   git log"

    def test_split_indices_per_field(self):
        """Match positions are re-based on the field they fall in"""
        command = make("gf", command="git fetch")
        match = fuzzy_match(lookup_string(command), "gf")
        parts = split_match_indices(command, match.indices)
        assert parts["alias"] == [0, 1]
        assert parts["command"] == []


class TestRanking:
    """Tests for scope resolution and ranking"""

    def test_empty_query_keeps_order(self):
        """Without a query the candidates come back unchanged"""
        candidates = [make("b"), make("a"), make("c")]
        assert filter_commands(ALL_NAMESPACES, "", candidates) == candidates

    def test_scope_restricts_namespace(self):
        """A namespace scope hides other namespaces"""
        candidates = [make("gl"), make("ls", "sys")]
        assert filter_commands("sys", "", candidates) == [make("ls", "sys")]
        assert filter_commands("sys", "gl", candidates) == []

    def test_best_score_first(self):
        """The closest match is ranked first"""
        candidates = [
            make("ls", command="list files"),
            make("gf", command="git fetch"),
        ]
        result = filter_commands("git", "fetch", candidates)
        assert result[0].alias == "gf"
        assert make("ls") not in result

    def test_ranking_is_stable_and_repeatable(self):
        """Ranking the ranked list again gives the same order"""
        candidates = [make("aa", command="echo x"), make("ab", command="echo x"), make("xe")]
        first = filter_commands(ALL_NAMESPACES, "ex", candidates)
        assert first == filter_commands(ALL_NAMESPACES, "ex", first)

    def test_multi_code_point_lowercase(self):
        """Commands holding a dotted capital I can still be searched"""
        command = make("tr", "misc", command="echo \u0130stanbul abc")
        assert filter_commands(ALL_NAMESPACES, "abc", [command]) == [command]

    def test_scores_sorted_descending(self):
        """Returned matches are ordered by score"""
        candidates = [make("cp", command="cp a b"), make("dc", command="docker compose"),
                      make("dcu", command="docker compose up")]
        scores = [m.score for _, m in rank_commands(ALL_NAMESPACES, "dc", candidates)]
        assert scores == sorted(scores, reverse=True)

    def test_placeholder_for_empty_store(self):
        """The all-namespaces scope of an empty store shows the demo entry"""
        assert resolve_candidates(NamespaceCache.build([]), ALL_NAMESPACES) == [Command.placeholder()]

    def test_unknown_namespace_is_empty(self):
        """An unknown namespace has no candidates, and no placeholder"""
        assert resolve_candidates(NamespaceCache.build([]), "nothing") == []

    def test_namespace_named_all(self):
        """A namespace literally called All is an ordinary scope"""
        cache = NamespaceCache.build([make("x", "All"), make("gl")])
        assert search(cache, "All", "") == [make("x", "All")]
        assert len(search(cache, ALL_NAMESPACES, "")) == 2


class TestSelectionCursor:
    """Tests for the cursor"""

    def test_clamp(self):
        """Out of range indices go back to zero"""
        assert clamp(2, 5) == 2
        assert clamp(5, 5) == 0
        assert clamp(3, 0) == 0
        assert clamp(-1, 3) == 0

    def test_revalidate(self):
        """The index survives when the list still has room for it"""
        cursor = SelectionCursor(3)
        assert cursor.revalidate(10) == 3
        assert cursor.revalidate(2) == 0

    def test_wrapping(self):
        """Moving past either end wraps around"""
        cursor = SelectionCursor()
        cursor.revalidate(3)
        assert cursor.previous() == 2
        assert cursor.next() == 0
        assert cursor.next() == 1

    def test_empty_list(self):
        """Moving on an empty list stays at zero"""
        cursor = SelectionCursor()
        cursor.revalidate(0)
        assert cursor.next() == 0
        assert cursor.previous() == 0
