"""
Tests for the resource resolver.

Uses in-memory ClusterPatterns snapshots (no cluster needed).
"""

import pytest

from skube_intent.models import ClusterPatterns, Intent
from skube_intent.resolver import ResourceResolver


@pytest.fixture
def empty_resolver():
    return ResourceResolver()


@pytest.fixture
def qa_patterns():
    return ClusterPatterns(
        deployments=["qa/my-service-qa", "qa/other-service"],
        naming_convention="hyphen",
    )


@pytest.fixture
def cluster():
    return ResourceResolver(
        ClusterPatterns(
            namespaces=["production", "staging", "kube-system"],
            common_apps=["grafana", "prometheus"],
            deployments=[
                "staging/api-gateway",
                "production/api-gateway-v2",
                "staging/backend",
                "staging/my-service",
                "broken-entry",
                "a/b/c",
            ],
            services=["staging/web-frontend", "production/payments"],
            pods=["staging/backend-7d9f8-abcde", "production/worker-0"],
        )
    )


class TestEmptyCorpus:
    """Resolution degrades to the input's hyphenated variant."""

    def test_multi_word_app(self, empty_resolver):
        assert empty_resolver.resolve_app_name("web server") == "web-server"

    def test_single_word_app(self, empty_resolver):
        assert empty_resolver.resolve_app_name("myapp", "qa") == "myapp"

    def test_empty_input(self, empty_resolver):
        assert empty_resolver.resolve_app_name("") == ""
        assert empty_resolver.resolve_namespace("") == ""

    def test_service_and_pod(self, empty_resolver):
        assert empty_resolver.resolve_service_name("web front") == "web-front"
        assert empty_resolver.resolve_pod_name("my pod", "qa") == "my-pod"

    def test_namespace_unchanged(self, empty_resolver):
        assert empty_resolver.resolve_namespace("qa") == "qa"

    def test_none_patterns(self):
        assert ResourceResolver(None).has_patterns() is False


class TestResolveAppName:
    """Test the exact -> fuzzy -> common apps -> pattern chain."""

    def test_app_namespace_pattern(self, qa_patterns):
        patterns = qa_patterns.model_copy(update={"patterns": ["{app}-{namespace}"]})
        assert ResourceResolver(patterns).resolve_app_name("my service", "qa") == "my-service-qa"

    def test_fuzzy_without_pattern(self, qa_patterns):
        assert ResourceResolver(qa_patterns).resolve_app_name("my service", "qa") == "my-service-qa"

    def test_exact_within_namespace(self, cluster):
        assert cluster.resolve_app_name("api gateway", "staging") == "api-gateway"

    def test_exact_case_insensitive(self, cluster):
        assert cluster.resolve_app_name("Backend", "staging") == "backend"

    def test_fuzzy_typo(self, cluster):
        assert cluster.resolve_app_name("backnd", "staging") == "backend"

    def test_namespace_filter_excludes_other_namespaces(self, cluster):
        assert cluster.resolve_app_name("backnd", "production") == "backnd"

    def test_common_apps(self, cluster):
        assert cluster.resolve_app_name("grafna") == "grafana"

    def test_pattern_only_match(self):
        resolver = ResourceResolver(
            ClusterPatterns(
                deployments=["staging/payments-staging"],
                patterns=["{app}-{namespace}"],
            )
        )
        assert resolver.resolve_app_name("payments", "staging") == "payments-staging"

    def test_pattern_requires_detection(self):
        resolver = ResourceResolver(ClusterPatterns(deployments=["staging/payments-staging"]))
        assert resolver.resolve_app_name("payments", "staging") == "payments"

    def test_camel_case_cluster(self):
        resolver = ResourceResolver(
            ClusterPatterns(deployments=["dev/userService"], naming_convention="camelCase")
        )
        assert resolver.resolve_app_name("user service", "dev") == "userService"

    def test_fallback_follows_convention(self):
        resolver = ResourceResolver(ClusterPatterns(naming_convention="underscore"))
        assert resolver.resolve_app_name("user service") == "user_service"

    def test_deterministic(self, cluster):
        results = {cluster.resolve_app_name("api gatewy", "staging") for _ in range(5)}
        assert results == {"api-gateway"}


class TestResolveServiceAndPod:
    """Test service and pod resolution."""

    def test_service_exact(self, cluster):
        assert cluster.resolve_service_name("web frontend", "staging") == "web-frontend"

    def test_service_fuzzy(self, cluster):
        assert cluster.resolve_service_name("paymnets", "production") == "payments"

    def test_service_wrong_namespace(self, cluster):
        assert cluster.resolve_service_name("payments", "staging") == "payments"

    def test_pod_exact(self, cluster):
        assert cluster.resolve_pod_name("worker-0") == "worker-0"

    def test_pod_fuzzy(self, cluster):
        assert cluster.resolve_pod_name("worker-1", "production") == "worker-0"


class TestResolveNamespace:
    """Test namespace resolution."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("production", "production"),
            ("Production", "production"),
            ("produciton", "production"),
            ("stagng", "staging"),
            ("unknown-ns", "unknown-ns"),
        ],
    )
    def test_resolve(self, cluster, value, expected):
        assert cluster.resolve_namespace(value) == expected


class TestHelpers:
    """Test corpus inspection helpers."""

    def test_has_patterns(self, cluster):
        assert cluster.has_patterns() is True

    def test_all_deployment_names_skips_malformed(self, cluster):
        assert cluster.all_deployment_names() == ["api-gateway", "api-gateway-v2", "backend", "my-service"]

    def test_is_valid_namespace(self, cluster):
        assert cluster.is_valid_namespace("KUBE-SYSTEM") is True
        assert cluster.is_valid_namespace("qa") is False


class TestResolveIntent:
    """Test resolving all names inside an Intent."""

    def test_resolves_namespace_then_names(self, cluster):
        intent = Intent(command="logs", app_name="my service", namespace="stagng")
        resolved = cluster.resolve_intent(intent)
        assert resolved.namespace == "staging"
        assert resolved.app_name == "my-service"
        assert resolved.command == "logs"

    def test_original_untouched(self, cluster):
        intent = Intent(command="scale", deployment_name="backnd", namespace="staging", replicas="3")
        resolved = cluster.resolve_intent(intent)
        assert resolved.deployment_name == "backend"
        assert resolved.replicas == "3"
        assert intent.deployment_name == "backnd"

    def test_empty_fields_stay_empty(self, cluster):
        resolved = cluster.resolve_intent(Intent(command="pods"))
        assert resolved.populated() == {"command": "pods"}

    def test_service_and_pod_fields(self, cluster):
        intent = Intent(command="forward", service_name="web frontend", namespace="staging", port="8080")
        assert cluster.resolve_intent(intent).service_name == "web-frontend"
