"""
Deterministic token-stream parser.

Turns an already shell-split argument list such as
``["logs", "of", "myapp", "in", "qa"]`` into an Intent. No AI models used.

Each token goes through an ordered chain of recognizers (stop words,
commands, resource keywords, flags, prepositions). The first one that
claims the token wins and may consume lookahead tokens through the cursor.
Unclaimed tokens fall through to default inference. The parser never
raises: unrecognized input just leaves fields empty.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .models import Command, Intent
from .vocabulary import (
    APPLY_FILE_MARKERS,
    COMMAND_ALIASES,
    CONTEXT_FIELDS,
    FOLLOW_KEYWORDS,
    GENERIC_RESOURCE_COMMANDS,
    IMPLIED_TARGETS,
    KW_APP,
    KW_DEPLOYMENT,
    KW_FILE,
    KW_POD,
    LIST_COMMANDS,
    NAME_BOUNDARY_WORDS,
    NAMESPACE_FLAGS,
    NAMESPACED_LIST_COMMANDS,
    PREFIX_KEYWORDS,
    PREP_FROM,
    PREP_IN,
    PREP_INTO,
    PREP_OF,
    PREP_TO,
    PREPOSITION_FIELDS,
    RESOURCE_ALIASES,
    SEARCH_KEYWORDS,
    SHOW_SUBCOMMANDS,
    STANDALONE_COMMANDS,
    STOP_WORDS,
)

logger = logging.getLogger("skube-intent.parser")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+\Z")

_BOUNDARY_WORDS = NAME_BOUNDARY_WORDS | {PREP_OF, PREP_INTO}


class TokenCursor:
    """Position in a token list with lookahead."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens: List[str] = list(tokens)
        self.index = 0

    @property
    def done(self) -> bool:
        return self.index >= len(self.tokens)

    @property
    def current(self) -> str:
        return self.tokens[self.index]

    def peek(self, offset: int = 1) -> Optional[str]:
        """Token ``offset`` places after the current one, or None."""
        position = self.index + offset
        if position < len(self.tokens):
            return self.tokens[position]
        return None

    def peek_lower(self, offset: int = 1) -> str:
        token = self.peek(offset)
        return token.lower() if token is not None else ""

    def skip_filler(self, offset: int = 1) -> int:
        """Offset of the first non-stop-word token at or after ``offset``."""
        while self.peek_lower(offset) in STOP_WORDS:
            offset += 1
        return offset

    def advance(self, count: int = 1) -> None:
        self.index = min(self.index + count, len(self.tokens))

    def exhaust(self) -> None:
        self.index = len(self.tokens)


@dataclass
class _ParseState:
    cursor: TokenCursor
    intent: Intent
    text: str
    # Namespace captured by a bare "in <x>" during a copy; may turn out to be the pod
    copy_namespace: str = ""


def _to_int(token: Optional[str]) -> Optional[int]:
    """Parse a plain ASCII integer with an optional sign; anything else is None."""
    if token is None or not _INTEGER_RE.match(token):
        return None
    return int(token)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _capture_resource_type(state: _ParseState) -> None:
    """Read the resource type after "show metrics" / "check usage"."""
    cursor = state.cursor
    offset = cursor.skip_filler()
    target = cursor.peek(offset)
    if target is not None and target.lower() not in _BOUNDARY_WORDS:
        state.intent.fill("resource_type", target)
        cursor.advance(offset)


def _parse_get(state: _ParseState) -> bool:
    cursor, intent = state.cursor, state.intent
    following = cursor.peek_lower()

    if following in LIST_COMMANDS:
        intent.set_command(LIST_COMMANDS[following])
        cursor.advance()
    elif following == "last":
        lines = _to_int(cursor.peek(2))
        if lines is not None:
            intent.fill("tail_lines", lines)
            cursor.advance(2)
    return True


def _parse_check(state: _ParseState) -> bool:
    cursor = state.cursor
    if cursor.peek_lower() != "usage":
        return False

    state.intent.set_command(Command.METRICS)
    cursor.advance()
    _capture_resource_type(state)
    return True


def _parse_show(state: _ParseState) -> bool:
    cursor, intent = state.cursor, state.intent
    offset = cursor.skip_filler()
    sub = cursor.peek_lower(offset)
    if sub not in SHOW_SUBCOMMANDS:
        return False

    cursor.advance(offset)
    intent.set_command(SHOW_SUBCOMMANDS[sub])
    if sub == "config":
        intent.fill("resource_type", "view")
    elif sub == "metrics":
        _capture_resource_type(state)
    return True


def _standalone_args(word: str, state: _ParseState) -> None:
    # "completion bash", "help logs"
    state.intent.fill("resource_type", state.cursor.peek())


def _apply_args(word: str, state: _ParseState) -> None:
    cursor = state.cursor
    if cursor.peek_lower() in APPLY_FILE_MARKERS and cursor.peek(2) is not None:
        state.intent.fill("file_path", cursor.peek(2))
        cursor.advance(2)


def _config_args(word: str, state: _ParseState) -> None:
    cursor, intent = state.cursor, state.intent
    scope = cursor.peek_lower()
    if scope == "context":
        intent.fill("resource_type", "context")
    elif scope in ("namespace", "ns"):
        intent.fill("resource_type", "namespace")
    else:
        return

    cursor.advance()
    if cursor.peek() is not None:
        intent.fill_target("resource_name", cursor.peek())
        cursor.advance()


def _copy_args(word: str, state: _ParseState) -> None:
    # "copy file <src>": the marker carries no value
    if state.cursor.peek_lower() == KW_FILE:
        state.cursor.advance()


def _explain_args(word: str, state: _ParseState) -> None:
    if word == "what" and state.cursor.peek_lower() == "is":
        state.cursor.advance()


_COMMAND_ARGUMENTS = {
    Command.COMPLETION.value: _standalone_args,
    Command.HELP.value: _standalone_args,
    Command.APPLY.value: _apply_args,
    Command.CONFIG.value: _config_args,
    Command.COPY.value: _copy_args,
    Command.EXPLAIN.value: _explain_args,
}

_SPECIAL_COMMANDS = {
    "get": _parse_get,
    "check": _parse_check,
    "show": _parse_show,
}


def _recognize_command(word: str, state: _ParseState) -> bool:
    special = _SPECIAL_COMMANDS.get(word)
    if special is not None and special(state):
        return True

    command = COMMAND_ALIASES.get(word)
    if command is None:
        return False

    state.intent.set_command(command)
    capture = _COMMAND_ARGUMENTS.get(command.value)
    if capture is not None:
        capture(word, state)

    if command.value in STANDALONE_COMMANDS:
        logger.debug(f"Standalone command '{command.value}', ignoring remaining tokens")
        state.cursor.exhaust()
    return True


# ---------------------------------------------------------------------------
# Resource keywords
# ---------------------------------------------------------------------------


def _recognize_resource(word: str, state: _ParseState) -> bool:
    cursor, intent = state.cursor, state.intent

    if word == KW_APP:
        name = cursor.peek()
        if name is not None:
            intent.fill_target("app_name", name)
            cursor.advance()
        return True

    resource = RESOURCE_ALIASES.get(word)
    if resource is None:
        return False

    # A bare "pods" acts like "get pods"
    if word in LIST_COMMANDS and intent.command in ("", Command.GET):
        intent.set_command(LIST_COMMANDS[word])
        return True

    if intent.command in GENERIC_RESOURCE_COMMANDS:
        intent.fill("resource_type", resource)
        return True

    # "restart the backend deployment": backend was taken as a pod name
    if resource == KW_DEPLOYMENT and intent.pod_name and not intent.deployment_name:
        intent.reclassify("pod_name", "deployment_name")
        logger.debug(f"Reclassified '{intent.deployment_name}' from pod to deployment")
        return True

    field = CONTEXT_FIELDS.get(resource)
    if field is not None and not getattr(intent, field):
        name = cursor.peek()
        if name is not None and name.lower() not in STOP_WORDS and name.lower() not in NAME_BOUNDARY_WORDS:
            intent.fill_target(field, name)
            cursor.advance()
    return True


# ---------------------------------------------------------------------------
# Flags and modifiers
# ---------------------------------------------------------------------------


def _recognize_flag(word: str, state: _ParseState) -> bool:
    cursor, intent = state.cursor, state.intent
    value = cursor.peek()

    if word == "--dry-run":
        intent.dry_run = True

    elif word == PREP_TO:
        if value is not None:
            intent.fill("dest_path" if intent.command == Command.COPY else "replicas", value)
            cursor.advance()

    elif word == "port":
        if value is not None:
            intent.fill("port", value)
            cursor.advance()

    elif word in FOLLOW_KEYWORDS:
        intent.follow = True

    elif word in PREFIX_KEYWORDS:
        if cursor.peek_lower() == "prefix":
            intent.prefix = True
            cursor.advance()
        elif word != "with":
            intent.prefix = True

    elif word in SEARCH_KEYWORDS:
        if value is not None:
            intent.fill("search_term", value.strip("\"'"))
            cursor.advance()

    elif word == "max":
        # "max 30" or "max log requests 30"
        if cursor.peek_lower() == "log" and cursor.peek_lower(2) == "requests":
            limit = _to_int(cursor.peek(3))
            if limit is not None:
                intent.fill("max_log_requests", limit)
                cursor.advance(3)
        else:
            limit = _to_int(value)
            if limit is not None:
                intent.fill("max_log_requests", limit)
                cursor.advance()

    elif word in NAMESPACE_FLAGS:
        if value is not None:
            intent.fill("namespace", value)
            cursor.advance()

    else:
        return False
    return True


# ---------------------------------------------------------------------------
# Prepositions
# ---------------------------------------------------------------------------


def _capture_bare_namespace(word: str, value: str, state: _ParseState) -> None:
    intent = state.intent

    # "copy ... in pod-123 in qa": the first bare value was the target pod
    if (
        intent.command == Command.COPY
        and word in (PREP_IN, PREP_INTO)
        and state.copy_namespace
        and intent.namespace == state.copy_namespace
        and not intent.has_target()
    ):
        intent.reclassify("namespace", "pod_name")
        logger.debug(f"Reclassified '{intent.pod_name}' from namespace to copy target pod")

    if intent.fill("namespace", value) and intent.command == Command.COPY:
        state.copy_namespace = value


def _recognize_preposition(word: str, state: _ParseState) -> bool:
    cursor, intent = state.cursor, state.intent

    if word == PREP_OF:
        # "logs of myapp", "logs of app myapp", "logs of pod mypod"
        following = cursor.peek_lower()
        if following in (KW_APP, KW_POD):
            name = cursor.peek(2)
            if name is not None:
                intent.fill_target("app_name" if following == KW_APP else "pod_name", name)
                cursor.advance(2)
        elif cursor.peek() is not None:
            intent.fill_target("app_name", cursor.peek())
            cursor.advance()
        return True

    if word not in (PREP_FROM, PREP_IN, PREP_INTO):
        return False

    following = cursor.peek_lower()
    if not following:
        return True

    if following == KW_FILE:
        path = cursor.peek(2)
        if path is not None:
            if intent.command == Command.APPLY:
                intent.fill("file_path", path)
            elif intent.command == Command.COPY:
                intent.fill("source_path", path)
            cursor.advance(2)
    elif following in PREPOSITION_FIELDS:
        value = cursor.peek(2)
        if value is not None:
            intent.fill_target(PREPOSITION_FIELDS[following], value)
            cursor.advance(2)
    else:
        _capture_bare_namespace(word, cursor.peek(), state)
        cursor.advance()
    return True


# ---------------------------------------------------------------------------
# Default inference for unclaimed tokens
# ---------------------------------------------------------------------------


def _infer_port_or_replicas(token: str, state: _ParseState) -> bool:
    """
    Value-shaped tokens: "8080:80" is a port; a bare integer is replicas when
    the input mentions "scale", else a port when it mentions "forward" or "port".

    The keyword check scans the whole joined input, so a namespace such as
    "scale-test" also counts.
    """
    intent = state.intent
    claimed = False

    if ":" in token and not intent.port and intent.command != Command.COPY:
        claimed = intent.fill("port", token)

    if _to_int(token) is not None and not intent.port and not intent.replicas:
        if "scale" in state.text:
            claimed = intent.fill("replicas", token)
        elif "forward" in state.text or "port" in state.text:
            claimed = intent.fill("port", token)

    return claimed


def _infer_namespace(token: str, state: _ParseState) -> bool:
    intent = state.intent
    if intent.namespace or token.startswith("-"):
        return False

    # "pods qa", "logs myapp qa"
    if intent.command in NAMESPACED_LIST_COMMANDS or intent.has_target():
        return intent.fill("namespace", token)
    return False


def _infer_target(token: str, state: _ParseState) -> bool:
    intent = state.intent
    if intent.has_target():
        return False

    field = IMPLIED_TARGETS.get(intent.command)
    if field is not None:
        return intent.fill_target(field, token)

    if intent.command in GENERIC_RESOURCE_COMMANDS:
        return intent.fill("resource_type", token) or intent.fill_target("resource_name", token)

    if intent.command == Command.COPY:
        return intent.fill("source_path", token) or intent.fill("dest_path", token)

    return False


_DEFAULT_INFERENCE = (_infer_port_or_replicas, _infer_namespace, _infer_target)


def _infer_default(token: str, state: _ParseState) -> None:
    for infer in _DEFAULT_INFERENCE:
        if infer(token, state):
            return
    logger.debug(f"Ignoring unrecognized token '{token}'")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_RECOGNIZERS: Sequence[Callable[[str, _ParseState], bool]] = (
    _recognize_command,
    _recognize_resource,
    _recognize_flag,
    _recognize_preposition,
)


def parse(args: Sequence[str]) -> Intent:
    """
    Parse a tokenized command line into an Intent.

    Deterministic and side-effect free; never raises.
    """
    tokens = list(args)
    intent = Intent()
    text = " ".join(tokens)

    # Namespace-first phrasing: "in qa logs from app myapp"
    if len(tokens) > 1 and tokens[0].lower() == PREP_IN:
        intent.fill("namespace", tokens[1])
        tokens = tokens[2:]

    state = _ParseState(cursor=TokenCursor(tokens), intent=intent, text=text)
    cursor = state.cursor

    while not cursor.done:
        token = cursor.current
        word = token.lower()

        if word not in STOP_WORDS:
            for recognize in _RECOGNIZERS:
                if recognize(word, state):
                    break
            else:
                _infer_default(token, state)

        cursor.advance()

    logger.debug(f"Parsed {tokens!r} -> {intent.populated()}")
    return intent
