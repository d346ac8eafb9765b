"""
Tests for the edit-distance engine and fuzzy matcher.

Covers distance properties, adaptive thresholds, closest-match selection
and partial (segment) matching.
"""

import pytest

from skube_intent.fuzzy import (
    adaptive_threshold,
    contains_fuzzy,
    find_closest_match,
    fuzzy_match,
    fuzzy_match_with_threshold,
    levenshtein_distance,
)


class TestLevenshteinDistance:
    """Test edit distance computation."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("hello", "hello", 0),
            ("Hello", "hello", 0),
            ("hello", "hallo", 1),
            ("abc", "def", 3),
            ("", "", 0),
            ("hello", "", 5),
            ("", "staging", 7),
            ("production", "produciton", 2),
            ("deployment", "depoloyment", 1),
            ("staging", "stagingg", 1),
            ("kitten", "sitting", 3),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    @pytest.mark.parametrize("s", ["", "a", "qa", "kube-system", "Überprüfung"])
    def test_identity(self, s):
        assert levenshtein_distance(s, s) == 0

    @pytest.mark.parametrize("s", ["x", "dev", "my-service-qa"])
    def test_empty_is_length(self, s):
        assert levenshtein_distance("", s) == len(s)

    def test_symmetric(self):
        assert levenshtein_distance("backend", "frontend") == levenshtein_distance("frontend", "backend")

    def test_multibyte_characters_are_single_units(self):
        assert levenshtein_distance("café", "cafe") == 1
        assert levenshtein_distance("日本", "日本語") == 1


class TestFuzzyMatch:
    """Test boolean fuzzy matching with an explicit budget."""

    @pytest.mark.parametrize(
        "a,b,max_distance,expected",
        [
            ("prod", "prod", 2, True),
            ("prod", "prdo", 1, False),
            ("prod", "prdo", 2, True),
            ("staging", "stagign", 2, True),
            ("prod", "production", 2, False),
            ("Prod", "prod", 0, True),
        ],
    )
    def test_fuzzy_match(self, a, b, max_distance, expected):
        assert fuzzy_match(a, b, max_distance) is expected


class TestFindClosestMatch:
    """Test closest candidate selection."""

    def test_exact_match(self):
        assert find_closest_match("production", ["dev", "staging", "production", "qa"]) == ("production", 0)

    def test_typo_correction(self):
        assert find_closest_match("produciton", ["dev", "staging", "production", "qa"]) == ("production", 2)

    def test_closest_when_none_exact(self):
        assert find_closest_match("stag", ["dev", "staging", "production"]) == ("staging", 3)

    def test_empty_candidates(self):
        assert find_closest_match("test", []) == ("", -1)

    def test_first_occurrence_wins_ties(self):
        assert find_closest_match("ab", ["ax", "xb", "ab1"]) == ("ax", 1)


class TestAdaptiveThreshold:
    """Test typo budget by string length."""

    @pytest.mark.parametrize(
        "s,expected",
        [
            ("", 1),
            ("abc", 1),
            ("prod", 1),
            ("stage", 2),
            ("staging", 2),
            ("my-service", 3),
            ("production", 3),
            ("my-application-name", 3),
        ],
    )
    def test_threshold(self, s, expected):
        assert adaptive_threshold(s) == expected


class TestFuzzyMatchWithThreshold:
    """Test closest match gated by the adaptive threshold."""

    @pytest.mark.parametrize(
        "target,candidates,expected",
        [
            ("qaa", ["prod", "dev", "qa"], ("qa", True)),
            ("prdo", ["prod", "dev", "qa"], ("", False)),
            ("stagign", ["staging", "production", "dev"], ("staging", True)),
            ("prodcution", ["production", "staging"], ("production", True)),
            ("produciton", ["dev", "staging", "production", "qa"], ("production", True)),
            ("xyz", ["production", "staging"], ("", False)),
            ("anything", [], ("", False)),
        ],
    )
    def test_threshold_match(self, target, candidates, expected):
        assert fuzzy_match_with_threshold(target, candidates) == expected


class TestContainsFuzzy:
    """Test partial matching."""

    def test_substring(self):
        assert contains_fuzzy("api", ["api-service", "web-server", "worker"], 2) == ("api-service", True)

    def test_substring_case_insensitive(self):
        assert contains_fuzzy("WEB", ["api-service", "web-server"], 0) == ("web-server", True)

    def test_fuzzy_segment(self):
        assert contains_fuzzy("srver", ["api-service", "web-server", "worker"], 2) == ("web-server", True)

    def test_segment_separators(self):
        assert contains_fuzzy("metrcs", ["kube_state.metrics"], 1) == ("kube_state.metrics", True)

    def test_whole_string(self):
        assert contains_fuzzy("wrker", ["api", "worker"], 1) == ("worker", True)

    def test_no_match(self):
        assert contains_fuzzy("xyz", ["api-service", "web-server"], 1) == ("", False)
