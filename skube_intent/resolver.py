"""
Resource resolver: maps user-typed names to real cluster resource names.

Works over a read-only ClusterPatterns snapshot. Strategies are tried in a
fixed order (exact, fuzzy, common apps, {app}-{namespace} pattern) with
every naming variant before moving to the next strategy. When nothing
matches, the first naming variant is returned; resolution never fails.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from .fuzzy import fuzzy_match_with_threshold
from .models import ClusterPatterns, Intent
from .naming import generate_naming_variants

logger = logging.getLogger("skube-intent.resolver")

APP_NAMESPACE_PATTERN = "{app}-{namespace}"


def _split_entries(entries: Sequence[str]) -> Iterator[Tuple[str, str]]:
    """Yield (namespace, name) for each well-formed ``namespace/name`` entry."""
    for entry in entries:
        parts = entry.split("/")
        if len(parts) != 2:
            continue
        yield parts[0], parts[1]


def _scoped_names(entries: Sequence[str], namespace: str) -> List[str]:
    """Names from ``entries``, limited to ``namespace`` when one is given."""
    namespace_lower = namespace.lower()
    return [name for ns, name in _split_entries(entries) if not namespace or ns.lower() == namespace_lower]


def _exact_match(variants: Sequence[str], candidates: Sequence[str]) -> str:
    for variant in variants:
        variant_lower = variant.lower()
        for candidate in candidates:
            if candidate.lower() == variant_lower:
                return candidate
    return ""


def _fuzzy_match(variants: Sequence[str], candidates: Sequence[str]) -> str:
    for variant in variants:
        match, found = fuzzy_match_with_threshold(variant, candidates)
        if found:
            return match
    return ""


class ResourceResolver:
    """Resolve app, service, pod and namespace names against learned patterns."""

    def __init__(self, patterns: Optional[ClusterPatterns] = None) -> None:
        self.patterns = patterns if patterns is not None else ClusterPatterns()

    def naming_variants(self, name: str) -> List[str]:
        return generate_naming_variants(name, self.patterns.naming_convention)

    def resolve_app_name(self, name: str, namespace: str = "") -> str:
        """Resolve an app or deployment name, optionally within a namespace."""
        if not name:
            return name

        variants = self.naming_variants(name)
        deployments = _scoped_names(self.patterns.deployments, namespace)

        match = (
            _exact_match(variants, deployments)
            or _fuzzy_match(variants, deployments)
            or _fuzzy_match(variants, self.patterns.common_apps)
            or self._pattern_match(variants, namespace)
        )
        return self._settle("app", name, match, variants)

    def resolve_service_name(self, name: str, namespace: str = "") -> str:
        if not name:
            return name

        variants = self.naming_variants(name)
        services = _scoped_names(self.patterns.services, namespace)

        match = _exact_match(variants, services) or _fuzzy_match(variants, services)
        return self._settle("service", name, match, variants)

    def resolve_pod_name(self, name: str, namespace: str = "") -> str:
        if not name:
            return name

        variants = self.naming_variants(name)
        pods = _scoped_names(self.patterns.pods, namespace)

        match = _exact_match(variants, pods) or _fuzzy_match(variants, pods)
        return self._settle("pod", name, match, variants)

    def resolve_namespace(self, name: str) -> str:
        """Resolve a namespace; unknown namespaces are returned unchanged."""
        if not name:
            return name

        match = _exact_match([name], self.patterns.namespaces)
        if not match:
            match, _ = fuzzy_match_with_threshold(name, self.patterns.namespaces)

        if match and match != name:
            logger.debug(f"Resolved namespace '{name}' -> '{match}'")
        return match or name

    def resolve_intent(self, intent: Intent) -> Intent:
        """
        Return a copy of ``intent`` with its namespace and target names resolved.

        The namespace is resolved first and then scopes the name lookups.
        Deployment names use the app strategy since both match deployments.
        """
        resolved = intent.model_copy()
        resolved.namespace = self.resolve_namespace(resolved.namespace)
        namespace = resolved.namespace

        resolvers = (
            ("app_name", self.resolve_app_name),
            ("deployment_name", self.resolve_app_name),
            ("pod_name", self.resolve_pod_name),
            ("service_name", self.resolve_service_name),
        )
        for field, resolve in resolvers:
            value = getattr(resolved, field)
            if value:
                setattr(resolved, field, resolve(value, namespace))

        return resolved

    def has_patterns(self) -> bool:
        """True once any deployments or namespaces have been learned."""
        return bool(self.patterns.deployments or self.patterns.namespaces)

    def all_deployment_names(self) -> List[str]:
        return [name for _, name in _split_entries(self.patterns.deployments)]

    def is_valid_namespace(self, namespace: str) -> bool:
        namespace_lower = namespace.lower()
        return any(ns.lower() == namespace_lower for ns in self.patterns.namespaces)

    def _pattern_match(self, variants: Sequence[str], namespace: str) -> str:
        """Try the ``{app}-{namespace}`` convention against all deployments."""
        if not namespace or APP_NAMESPACE_PATTERN not in self.patterns.patterns:
            return ""
        candidates = [f"{variant}-{namespace}" for variant in variants]
        return _exact_match(candidates, self.all_deployment_names())

    def _settle(self, kind: str, name: str, match: str, variants: Sequence[str]) -> str:
        if match:
            logger.debug(f"Resolved {kind} '{name}' -> '{match}'")
            return match
        logger.debug(f"No {kind} match for '{name}', using '{variants[0]}'")
        return variants[0]
