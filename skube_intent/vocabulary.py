"""
Static word tables for the token-stream parser.

All tables are immutable: frozensets and read-only mapping proxies built
once at import time. Keys are lowercase tokens.
"""

from types import MappingProxyType

from .models import Command

# Prepositions
PREP_IN = "in"
PREP_FROM = "from"
PREP_OF = "of"
PREP_TO = "to"
PREP_INTO = "into"

# Keywords that name the kind of the following value
KW_APP = "app"
KW_POD = "pod"
KW_DEPLOYMENT = "deployment"
KW_SERVICE = "service"
KW_NAMESPACE = "namespace"
KW_FILE = "file"

# Semantically empty filler skipped outright by the parser
STOP_WORDS = frozenset({
    "the", "a", "an",
    "my", "our", "your",
    "please", "plz", "kindly",
    "me", "us",
    "for", "target",
    "resource", "resources", "object", "objects",
    "here", "now",
})

# A context-setting keyword never swallows one of these as its name
NAME_BOUNDARY_WORDS = frozenset({PREP_IN, PREP_FROM, PREP_TO})

COMMAND_ALIASES = MappingProxyType({
    "completion": Command.COMPLETION,
    "update": Command.UPDATE,
    "version": Command.VERSION, "-v": Command.VERSION, "--version": Command.VERSION,
    "help": Command.HELP, "-h": Command.HELP, "--help": Command.HELP,
    "apply": Command.APPLY, "create": Command.APPLY,
    "delete": Command.DELETE, "remove": Command.DELETE, "destroy": Command.DELETE,
    "edit": Command.EDIT, "change": Command.EDIT, "modify": Command.EDIT,
    "use": Command.CONFIG, "switch": Command.CONFIG, "config": Command.CONFIG,
    "copy": Command.COPY, "cp": Command.COPY,
    "explain": Command.EXPLAIN, "what": Command.EXPLAIN,
    "logs": Command.LOGS, "log": Command.LOGS, "monitor": Command.LOGS, "tail": Command.LOGS,
    "shell": Command.SHELL, "exec": Command.SHELL, "ssh": Command.SHELL, "connect": Command.SHELL,
    "restart": Command.RESTART, "reboot": Command.RESTART, "bounce": Command.RESTART,
    "scale": Command.SCALE, "resize": Command.SCALE,
    "rollback": Command.ROLLBACK, "undo": Command.ROLLBACK, "revert": Command.ROLLBACK,
    "forward": Command.FORWARD, "port-forward": Command.FORWARD, "tunnel": Command.FORWARD,
    "describe": Command.DESCRIBE, "inspect": Command.DESCRIBE, "details": Command.DESCRIBE,
    "status": Command.STATUS, "health": Command.STATUS,
    "events": Command.EVENTS, "history": Command.EVENTS,
    "get": Command.GET, "list": Command.GET, "show": Command.GET, "fetch": Command.GET,
    "give": Command.GET, "check": Command.GET,
})

# Commands that stop parsing right after their optional argument
STANDALONE_COMMANDS = frozenset({
    Command.COMPLETION.value,
    Command.UPDATE.value,
    Command.HELP.value,
})

# "show <sub>" shortcuts that bypass the generic get alias
SHOW_SUBCOMMANDS = MappingProxyType({
    "status": Command.STATUS,
    "events": Command.EVENTS,
    "config": Command.CONFIG,
    "metrics": Command.METRICS,
})

# Resource keyword -> canonical singular resource type
RESOURCE_ALIASES = MappingProxyType({
    "namespaces": "namespace", "ns": "namespace", "namespace": "namespace",
    "pods": "pod", "pod": "pod",
    "deployments": "deployment", "deploy": "deployment", "deployment": "deployment",
    "services": "service", "svc": "service", "service": "service",
    "nodes": "node", "no": "node", "node": "node",
    "configmaps": "configmap", "cm": "configmap", "configmap": "configmap",
    "secrets": "secret", "secret": "secret",
    "ingresses": "ingress", "ing": "ingress", "ingress": "ingress",
    "persistentvolumeclaims": "persistentvolumeclaim", "pvc": "persistentvolumeclaim",
})

# Resource keyword -> list command ("get pods", or a bare "pods")
LIST_COMMANDS = MappingProxyType({
    "namespaces": Command.NAMESPACES, "ns": Command.NAMESPACES,
    "pods": Command.PODS, "pod": Command.PODS,
    "deployments": Command.DEPLOYMENTS, "deploy": Command.DEPLOYMENTS,
    "services": Command.SERVICES, "svc": Command.SERVICES,
    "nodes": Command.NODES, "no": Command.NODES, "node": Command.NODES,
    "configmaps": Command.CONFIGMAPS, "cm": Command.CONFIGMAPS, "configmap": Command.CONFIGMAPS,
    "secrets": Command.SECRETS, "secret": Command.SECRETS,
    "ingresses": Command.INGRESSES, "ing": Command.INGRESSES, "ingress": Command.INGRESSES,
    "persistentvolumeclaims": Command.PVCS, "pvc": Command.PVCS,
    "all": Command.ALL,
})

# Commands whose bare trailing word is read as the namespace
NAMESPACED_LIST_COMMANDS = frozenset({
    Command.PODS.value,
    Command.DEPLOYMENTS.value,
    Command.SERVICES.value,
    Command.NODES.value,
    Command.CONFIGMAPS.value,
    Command.SECRETS.value,
    Command.INGRESSES.value,
    Command.PVCS.value,
    Command.EVENTS.value,
    Command.STATUS.value,
    Command.ALL.value,
})

# Commands that take "<type> <name>" instead of a fixed resource kind
GENERIC_RESOURCE_COMMANDS = frozenset({
    Command.DELETE.value,
    Command.EDIT.value,
    Command.EXPLAIN.value,
    Command.DESCRIBE.value,
})

# "deployment api" / "service web" / "namespace qa"
CONTEXT_FIELDS = MappingProxyType({
    KW_DEPLOYMENT: "deployment_name",
    KW_SERVICE: "service_name",
    KW_NAMESPACE: "namespace",
})

# "from|in|into <kind> <value>"
PREPOSITION_FIELDS = MappingProxyType({
    KW_POD: "pod_name",
    KW_DEPLOYMENT: "deployment_name",
    KW_SERVICE: "service_name",
    KW_NAMESPACE: "namespace",
    KW_APP: "app_name",
})

# Bare-token fallback: command -> field that receives the implied name
IMPLIED_TARGETS = MappingProxyType({
    Command.LOGS.value: "pod_name",
    Command.SHELL.value: "pod_name",
    Command.RESTART.value: "pod_name",
    Command.SCALE.value: "deployment_name",
    Command.ROLLBACK.value: "deployment_name",
    Command.FORWARD.value: "service_name",
})

SEARCH_KEYWORDS = frozenset({"search", "find", "filter", "grep"})
PREFIX_KEYWORDS = frozenset({"prefix", "prefixes", "with"})
FOLLOW_KEYWORDS = frozenset({"follow", "-f"})
NAMESPACE_FLAGS = frozenset({"-n", "--namespace"})
APPLY_FILE_MARKERS = frozenset({KW_FILE, "-f"})
