"""
Read-only loader for the cluster pattern corpus.

The corpus is written by an external cluster scan as one JSON file per
kube context under ``<config dir>/patterns/``. This module only reads it;
any problem with the file yields an empty corpus.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .models import ClusterPatterns

logger = logging.getLogger("skube-intent.patterns")

PATTERNS_SUBDIR = "patterns"

_UNSAFE_FILENAME_CHARS = '/:\\ *?"<>|'


def config_dir() -> Path:
    """Locate the skube configuration directory."""
    override = os.getenv("SKUBE_CONFIG_DIR", "")
    if override:
        return Path(override)
    return Path.home() / ".config" / "skube"


def sanitize_context_name(context: str) -> str:
    """Turn a kube context name into a safe file name."""
    for char in _UNSAFE_FILENAME_CHARS:
        context = context.replace(char, "_")
    return context


def patterns_path(context: str) -> Path:
    return config_dir() / PATTERNS_SUBDIR / f"{sanitize_context_name(context)}.json"


def find_patterns_file(context: Optional[str] = None) -> Optional[Path]:
    """Return the first existing corpus file: SKUBE_PATTERNS_FILE, then the context's cache."""
    candidates = [os.getenv("SKUBE_PATTERNS_FILE", "")]
    if context:
        candidates.append(str(patterns_path(context)))

    for c in candidates:
        if c and Path(c).is_file():
            return Path(c)
    return None


def load_cluster_patterns(path: Optional[Path] = None, context: Optional[str] = None) -> ClusterPatterns:
    """
    Load a ClusterPatterns snapshot.

    Returns an empty corpus when no file is found, the file cannot be read
    or parsed, or it was recorded for a different kube context.
    """
    if path is None:
        path = find_patterns_file(context)
    if path is None:
        logger.debug("No cluster pattern corpus found, using an empty one")
        return ClusterPatterns()

    try:
        data = json.loads(Path(path).read_text())
        patterns = ClusterPatterns.model_validate(data)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring cluster pattern corpus {path}: {e}")
        return ClusterPatterns()

    if context and patterns.kube_context and patterns.kube_context != context:
        logger.warning(f"Cluster pattern corpus {path} belongs to context '{patterns.kube_context}', not '{context}'")
        return ClusterPatterns()

    logger.info(f"Loaded cluster patterns from {path}: {len(patterns.namespaces)} namespaces, {len(patterns.deployments)} deployments")
    return patterns
