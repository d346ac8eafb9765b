"""
Naming-convention variants for user-typed resource names.

"web server" may live in a cluster as web-server, webServer, web_server,
WebServer or webserver. The variants are ordered so the cluster's dominant
convention is tried first.
"""

from typing import Dict, List

HYPHEN = "hyphen"
CAMEL_CASE = "camelCase"
UNDERSCORE = "underscore"
PASCAL_CASE = "PascalCase"
NO_SPACE = "nospace"
ORIGINAL = "original"

NAMING_PRIORITY = (HYPHEN, CAMEL_CASE, UNDERSCORE, PASCAL_CASE, NO_SPACE, ORIGINAL)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def normalize_spaces_to_hyphens(s: str) -> str:
    """Lowercase and turn every space and underscore into a hyphen."""
    return s.replace(" ", "-").replace("_", "-").lower()


def naming_renderings(name: str) -> Dict[str, str]:
    """Map each naming convention to its rendering of a multi-word name."""
    words = name.split()
    renderings = {HYPHEN: "-".join(words).lower()}
    if len(words) > 1:
        renderings[CAMEL_CASE] = words[0].lower() + "".join(_capitalize(w) for w in words[1:])
    renderings[UNDERSCORE] = "_".join(words).lower()
    renderings[PASCAL_CASE] = "".join(_capitalize(w) for w in words)
    renderings[NO_SPACE] = "".join(words).lower()
    renderings[ORIGINAL] = name
    return renderings


def generate_naming_variants(name: str, convention: str = "") -> List[str]:
    """
    Return candidate renderings of ``name``, most likely first.

    A name without spaces is returned unchanged as the only variant. For a
    multi-word name the rendering for ``convention`` (when it is one of the
    known conventions) leads, followed by the rest in NAMING_PRIORITY order.
    """
    if " " not in name or not name.split():
        return [name]

    renderings = naming_renderings(name)

    variants = []
    if convention in renderings:
        variants.append(renderings.pop(convention))
    variants.extend(renderings[key] for key in NAMING_PRIORITY if key in renderings)
    return variants
