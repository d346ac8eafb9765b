"""
Pydantic models for the skube intent layer.

Defines the canonical command values, the Intent record built by the
token-stream parser, and the read-only cluster pattern corpus consumed
by the resource resolver.
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Command(str, Enum):
    """Canonical commands an Intent can carry."""

    # Listing
    PODS = "pods"
    DEPLOYMENTS = "deployments"
    SERVICES = "services"
    NAMESPACES = "namespaces"
    NODES = "nodes"
    CONFIGMAPS = "configmaps"
    SECRETS = "secrets"
    INGRESSES = "ingresses"
    PVCS = "pvcs"
    ALL = "all"

    # Workloads
    LOGS = "logs"
    SHELL = "shell"
    RESTART = "restart"
    SCALE = "scale"
    ROLLBACK = "rollback"
    FORWARD = "forward"
    COPY = "copy"

    # Generic resources
    DESCRIBE = "describe"
    APPLY = "apply"
    DELETE = "delete"
    EDIT = "edit"
    EXPLAIN = "explain"

    # Cluster
    CONFIG = "config"
    METRICS = "metrics"
    STATUS = "status"
    EVENTS = "events"

    # Standalone
    UPDATE = "update"
    HELP = "help"
    COMPLETION = "completion"
    VERSION = "version"

    # Placeholder left by list/show/fetch until a resource word upgrades it
    GET = "get"


# Fields naming the primary target of a command. At most one is set per parse,
# except resource_type + resource_name for generic resource commands.
TARGET_FIELDS = ("pod_name", "app_name", "deployment_name", "service_name", "resource_name")

_TEXT_FIELDS = (
    "command",
    "namespace",
    "app_name",
    "pod_name",
    "service_name",
    "deployment_name",
    "resource_type",
    "resource_name",
    "port",
    "replicas",
    "file_path",
    "source_path",
    "dest_path",
    "search_term",
)


class Intent(BaseModel):
    """Structured result of parsing one command line.

    Accepts both snake_case field names and their camelCase aliases
    (``appName``, ``podName`` ...) so replies from an AI parsing path
    validate directly.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    command: str = ""
    namespace: str = ""
    app_name: str = ""
    pod_name: str = ""
    service_name: str = ""
    deployment_name: str = ""
    resource_type: str = ""
    resource_name: str = ""
    port: str = ""
    replicas: str = ""
    file_path: str = ""
    source_path: str = ""
    dest_path: str = ""
    search_term: str = ""
    follow: bool = False
    prefix: bool = False
    dry_run: bool = False
    tail_lines: int = 0
    max_log_requests: int = 0

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("tail_lines", "max_log_requests", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> Any:
        return 0 if value is None else value

    def fill(self, field: str, value: Any) -> bool:
        """Set a field unless it already holds a value (first writer wins).

        Returns True when the value was stored.
        """
        if not value or getattr(self, field):
            return False
        setattr(self, field, value)
        return True

    def fill_target(self, field: str, value: Any) -> bool:
        """Like fill() for a target field; a no-op once any target is set."""
        if field in TARGET_FIELDS and self.has_target():
            return False
        return self.fill(field, value)

    def set_command(self, command: Command) -> None:
        """Replace the command; later command keywords override earlier ones."""
        self.command = Command(command).value

    def reclassify(self, source: str, target: str) -> bool:
        """Move a captured value from one field to an empty one."""
        value = getattr(self, source)
        if not value or getattr(self, target):
            return False
        setattr(self, target, value)
        setattr(self, source, "")
        return True

    def has_target(self) -> bool:
        return any(getattr(self, name) for name in TARGET_FIELDS)

    def populated(self, by_alias: bool = False) -> Dict[str, Any]:
        """Return only the fields that differ from their defaults."""
        return self.model_dump(exclude_defaults=True, by_alias=by_alias)


class ClusterPatterns(BaseModel):
    """Learned snapshot of real resource names in one cluster.

    Produced by an external scan; deployments, services and pods use the
    ``namespace/name`` form. Read-only for this package.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kube_context: str = ""
    cluster_name: str = ""
    namespaces: List[str] = Field(default_factory=list)
    common_apps: List[str] = Field(default_factory=list)
    deployments: List[str] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    pods: List[str] = Field(default_factory=list)
    patterns: List[str] = Field(default_factory=list)
    multi_word_resources: List[str] = Field(default_factory=list)
    app_labels: Dict[str, str] = Field(default_factory=dict)
    naming_convention: str = ""

    @field_validator(
        "namespaces",
        "common_apps",
        "deployments",
        "services",
        "pods",
        "patterns",
        "multi_word_resources",
        mode="before",
    )
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("app_labels", mode="before")
    @classmethod
    def _none_to_dict(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("kube_context", "cluster_name", "naming_convention", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value
