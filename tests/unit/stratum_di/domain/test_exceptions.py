"""Unit tests for domain exceptions."""

import pytest

from stratum_di.domain.enums import Multiplicity
from stratum_di.domain.exceptions import (
    CircularDependencyError,
    ConfigurationError,
    FeatureCardinalityError,
    FeatureConflictError,
    FeatureError,
    InitializationError,
    LifecycleError,
    MissingBindingError,
    MultiplicityMismatchError,
    ProductionError,
    StratumError,
    UnknownFeatureError,
)
from stratum_di.domain.models import create_token


class TestHierarchy:
    """Test cases for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error_type",
        [
            MissingBindingError,
            MultiplicityMismatchError,
            LifecycleError,
            InitializationError,
            FeatureError,
            ConfigurationError,
            CircularDependencyError,
            ProductionError,
        ],
    )
    def test_errors_inherit_from_base(self, error_type):
        """Test that every error derives from StratumError."""
        assert issubclass(error_type, StratumError)

    @pytest.mark.parametrize("error_type", [FeatureCardinalityError, FeatureConflictError, UnknownFeatureError])
    def test_feature_errors_inherit_from_feature_error(self, error_type):
        """Test the feature error family."""
        assert issubclass(error_type, FeatureError)

    def test_base_error_can_be_raised(self):
        """Test raising the base error with a message."""
        with pytest.raises(StratumError, match="boom"):
            raise StratumError("boom")


class TestMessages:
    """Test cases for error attributes and messages."""

    def test_missing_binding(self):
        """Test MissingBindingError attributes."""
        token = create_token("DATABASE")
        error = MissingBindingError(token, "root")

        assert error.token is token
        assert error.scope_name == "root"
        assert str(error) == "No binding for token 'DATABASE' reachable from scope 'root'"

    def test_missing_binding_without_scope(self):
        """Test MissingBindingError without scope name."""
        assert str(MissingBindingError(create_token("DATABASE"))) == "No binding for token 'DATABASE'"

    def test_multiplicity_mismatch(self):
        """Test MultiplicityMismatchError message."""
        token = create_token("PLUGINS", Multiplicity.MULTI)
        error = MultiplicityMismatchError(token, Multiplicity.SINGLE)

        assert error.expected == Multiplicity.SINGLE
        assert "multi-valued" in str(error)
        assert "single-valued" in str(error)

    def test_initialization_error(self):
        """Test InitializationError message."""
        error = InitializationError("admin", "boom")

        assert error.scope_name == "admin"
        assert error.reason == "boom"
        assert str(error) == "Initialization of scope 'admin' failed: boom"

    def test_initialization_error_anonymous(self):
        """Test InitializationError without a scope name."""
        assert "<anonymous>" in str(InitializationError(None, "boom"))

    def test_feature_cardinality(self):
        """Test FeatureCardinalityError attributes."""
        error = FeatureCardinalityError("memory", 2, 1)

        assert (error.kind, error.count, error.limit) == ("memory", 2, 1)
        assert str(error) == "Feature 'memory' given 2 times, at most 1 allowed"

    def test_feature_conflict(self):
        """Test FeatureConflictError attributes."""
        error = FeatureConflictError(["silent", "memory"])

        assert error.kinds == ["silent", "memory"]
        assert str(error) == "Features 'silent', 'memory' cannot be combined"

    def test_configuration_error_sorts_options(self):
        """Test ConfigurationError option list."""
        error = ConfigurationError("bad", {"b", "a"})
        assert error.options == ["a", "b"]

    def test_configuration_error_without_options(self):
        """Test ConfigurationError defaults."""
        assert ConfigurationError("bad").options == []

    def test_circular_dependency_chain(self):
        """Test CircularDependencyError message."""
        a, b = create_token("A"), create_token("B")
        error = CircularDependencyError([a, b, a])

        assert error.dependency_chain == [a, b, a]
        assert str(error) == "Circular dependency detected: A -> B -> A"

    def test_production_error(self):
        """Test ProductionError message."""
        token = create_token("SERVICE")
        error = ProductionError(token, "boom")

        assert error.token is token
        assert str(error) == "Cannot produce value for token 'SERVICE'. Reason: boom"
