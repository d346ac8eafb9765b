"""
Natural-language command parsing for skube.

Turns loosely phrased kubectl-style requests into structured intents and
resolves the names inside them against learned cluster resource names.

Usage:
    from skube_intent import SkubeIntentParser

    parser = SkubeIntentParser()
    intent = parser.parse(["logs", "of", "myapp", "in", "qa"])
    print(intent.command, intent.app_name, intent.namespace)
"""

from typing import Optional, Sequence

from .models import ClusterPatterns, Command, Intent
from .fuzzy import (
    adaptive_threshold,
    contains_fuzzy,
    find_closest_match,
    fuzzy_match,
    fuzzy_match_with_threshold,
    levenshtein_distance,
)
from .naming import generate_naming_variants, normalize_spaces_to_hyphens
from .parser import parse
from .patterns import load_cluster_patterns
from .resolver import ResourceResolver
from .router import AIResponseError, register_ai_backend, route, tokenize


class SkubeIntentParser:
    """High-level interface combining parsing and name resolution."""

    def __init__(self, patterns: Optional[ClusterPatterns] = None) -> None:
        """Use the given corpus, or load the configured one from disk."""
        if patterns is None:
            patterns = load_cluster_patterns()
        self.resolver = ResourceResolver(patterns)

    def parse(self, args: Sequence[str]) -> Intent:
        """Parse tokens without resolving names (useful for testing)."""
        return parse(args)

    async def process(self, text: str) -> Intent:
        """Tokenize, route and resolve a command line."""
        intent = await route(tokenize(text))
        return self.resolver.resolve_intent(intent)


__all__ = [
    "SkubeIntentParser",
    "AIResponseError",
    "ClusterPatterns",
    "Command",
    "Intent",
    "ResourceResolver",
    "adaptive_threshold",
    "contains_fuzzy",
    "find_closest_match",
    "fuzzy_match",
    "fuzzy_match_with_threshold",
    "generate_naming_variants",
    "levenshtein_distance",
    "load_cluster_patterns",
    "normalize_spaces_to_hyphens",
    "parse",
    "register_ai_backend",
    "route",
    "tokenize",
]
