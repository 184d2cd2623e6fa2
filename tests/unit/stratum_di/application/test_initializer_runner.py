"""Unit tests for InitializerRunner."""

import pytest

from stratum_di.application.initializer_runner import SCOPE_INITIALIZER, InitializerRunner, initializer
from stratum_di.application.scope import Scope
from stratum_di.domain import (
    Binding,
    Bundle,
    IInitializerRunner,
    InitializationError,
    MissingBindingError,
    Multiplicity,
    create_token,
)

REGISTRY = create_token("REGISTRY")
NAME = create_token("NAME")


class TestInitializerBinding:
    """Test cases for the initializer helper."""

    def test_reserved_token_is_multi(self):
        """Test that the reserved token is multi-valued."""
        assert SCOPE_INITIALIZER.multiplicity == Multiplicity.MULTI

    def test_initializer_binding_targets_reserved_token(self):
        """Test the binding produced by initializer()."""
        binding = initializer(lambda scope: None)
        assert binding.token is SCOPE_INITIALIZER

    def test_initializer_value_is_zero_argument(self):
        """Test that the resolved initializer takes no arguments."""
        calls = []
        scope = Scope()
        scope.apply_bundle(Bundle.of(initializer(lambda s: calls.append(s))))
        scope.mark_ready()

        [callback] = scope.resolve_all(SCOPE_INITIALIZER, self_only=True)
        callback()

        assert calls == [scope, scope]


class TestInitializerRunner:
    """Test cases for running initializers."""

    def test_runner_implements_interface(self):
        """Test that InitializerRunner implements IInitializerRunner."""
        assert isinstance(InitializerRunner(), IInitializerRunner)

    def test_runs_in_registration_order(self):
        """Test ordering of initializers."""
        order = []
        scope = Scope()
        scope.apply_bundle(Bundle.of(initializer(lambda s: order.append(1))))
        scope.apply_bundle(Bundle.of(initializer(lambda s: order.append(2)), initializer(lambda s: order.append(3))))

        scope.mark_ready()

        assert order == [1, 2, 3]

    def test_plain_zero_argument_callable(self):
        """Test registering a zero-argument callable directly."""
        calls = []
        scope = Scope()
        scope.apply_bundle(Bundle.of(Binding.value(SCOPE_INITIALIZER, lambda: calls.append("ran"))))

        scope.mark_ready()

        assert calls == ["ran"]

    def test_no_initializers(self):
        """Test a scope without initializers."""
        scope = Scope()
        scope.mark_ready()

        assert InitializerRunner().run(scope) == 0

    def test_initializer_resolves_same_scope(self):
        """Test that initializers see earlier bindings of their scope."""
        registry = {}
        scope = Scope()
        scope.apply_bundle(
            Bundle.of(
                Binding.value(REGISTRY, registry),
                Binding.value(NAME, "audit"),
                initializer(lambda s: s.resolve(REGISTRY).setdefault(s.resolve(NAME), "attached")),
            )
        )

        scope.mark_ready()

        assert scope.resolve(REGISTRY) == {"audit": "attached"}

    def test_ancestor_initializers_not_rerun(self):
        """Test that a child only runs its own initializers."""
        calls = []
        root = Scope(name="root")
        root.apply_bundle(Bundle.of(initializer(lambda s: calls.append(s.name))))
        root.mark_ready()
        child = Scope(root, name="child")
        child.apply_bundle(Bundle.of(initializer(lambda s: calls.append(s.name))))
        child.mark_ready()

        assert calls == ["root", "child"]

    def test_failure_wraps_exception(self):
        """Test that a failing initializer raises InitializationError."""

        def broken(scope):
            raise KeyError("missing handler")

        scope = Scope(name="admin")
        scope.apply_bundle(Bundle.of(initializer(broken)))

        with pytest.raises(InitializationError) as exc_info:
            scope.mark_ready()

        assert exc_info.value.scope_name == "admin"
        assert "#0" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_engine_errors_are_wrapped_too(self):
        """Test that a missing binding inside an initializer aborts readiness."""
        scope = Scope()
        scope.apply_bundle(Bundle.of(initializer(lambda s: s.resolve(create_token("ABSENT")))))

        with pytest.raises(InitializationError) as exc_info:
            scope.mark_ready()

        assert isinstance(exc_info.value.__cause__, MissingBindingError)

    def test_failure_stops_later_initializers(self):
        """Test that initializers after a failure do not run."""
        calls = []

        def broken(scope):
            raise RuntimeError("boom")

        scope = Scope()
        scope.apply_bundle(Bundle.of(initializer(broken), initializer(lambda s: calls.append("late"))))

        with pytest.raises(InitializationError):
            scope.mark_ready()

        assert calls == []
