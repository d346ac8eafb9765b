"""
Router between the rule-based parser and an optional AI parsing backend.

A leading ``--ai`` token asks for AI-assisted parsing. The backend itself
(model client, prompt) lives outside this package and is registered here
as an async callable that returns the model's raw reply. Any failure on
the AI path falls back to the rule-based parser.
"""

import json
import logging
import os
import shlex
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from .models import Intent
from .parser import parse

logger = logging.getLogger("skube-intent.router")

AI_FLAG = "--ai"

# Type for AI backends: natural language in, raw model reply out
AIBackend = Callable[[str], Awaitable[str]]

# Registry of provider name -> backend
_backends: Dict[str, AIBackend] = {}


class AIResponseError(ValueError):
    """The AI backend reply did not contain a usable JSON object."""


def register_ai_backend(name: str, backend: AIBackend) -> None:
    """Register an AI parsing backend under a provider name."""
    _backends[name] = backend
    logger.debug(f"Registered AI backend '{name}'")


def get_ai_backend(name: Optional[str] = None) -> Optional[AIBackend]:
    """
    Get a registered backend.

    Without a name, SKUBE_AI_PROVIDER picks the provider; if that is unset
    the first registered backend is used.
    """
    name = name or os.getenv("SKUBE_AI_PROVIDER", "")
    if name:
        return _backends.get(name)
    return next(iter(_backends.values()), None)


def has_ai_flag(args: Sequence[str]) -> bool:
    return len(args) > 0 and args[0] == AI_FLAG


def strip_ai_flag(args: Sequence[str]) -> List[str]:
    if has_ai_flag(args):
        return list(args[1:])
    return list(args)


def tokenize(text: str) -> List[str]:
    """Split a command line like a shell; fall back to whitespace on bad quoting."""
    try:
        return shlex.split(text)
    except ValueError:
        return text.split()


def extract_json(text: str) -> str:
    """Return the span from the first '{' to the last '}', if there is one."""
    text = text.strip()
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text


def intent_from_ai_response(text: str) -> Intent:
    """Build an Intent from a model reply containing a JSON object."""
    try:
        data = json.loads(extract_json(text))
    except json.JSONDecodeError as e:
        raise AIResponseError(f"failed to parse AI response as JSON: {e}") from e

    if not isinstance(data, dict):
        raise AIResponseError("AI response is not a JSON object")

    try:
        return Intent.model_validate(data)
    except ValidationError as e:
        raise AIResponseError(f"AI response does not describe an intent: {e}") from e


async def route(args: Sequence[str]) -> Intent:
    """
    Parse args with the AI backend when ``--ai`` leads and a backend is
    registered, otherwise with the rule-based parser.

    Never raises: AI failures are logged and the rule-based result returned.
    """
    if not has_ai_flag(args):
        return parse(args)

    tokens = strip_ai_flag(args)
    backend = get_ai_backend()
    if backend is None:
        logger.warning("AI parsing requested but no backend is registered, using rule-based parser")
        return parse(tokens)

    try:
        reply = await backend(" ".join(tokens))
        intent = intent_from_ai_response(reply)
    except Exception as e:
        logger.warning(f"AI parsing failed, using rule-based parser: {e}", exc_info=True)
        return parse(tokens)

    logger.debug(f"AI parsed {tokens!r} -> {intent.populated()}")
    return intent
