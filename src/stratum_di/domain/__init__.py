"""
Domain layer - Core composition model.

This layer contains tokens, bindings, bundles, features and the error
hierarchy. It has no dependencies on other layers.
"""

from .bundle import Bundle, Feature
from .enums import CallStyle, Multiplicity, ProducerKind, ScopeState
from .exceptions import (
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
from .interfaces import IBindingTable, IInitializerRunner, IResolver, IScope
from .models import Binding, Capability, Inject, Producer, Token, create_token

__all__ = [
    # Enums
    "CallStyle",
    "Multiplicity",
    "ProducerKind",
    "ScopeState",
    # Exceptions
    "StratumError",
    "MissingBindingError",
    "MultiplicityMismatchError",
    "LifecycleError",
    "InitializationError",
    "FeatureError",
    "FeatureCardinalityError",
    "FeatureConflictError",
    "UnknownFeatureError",
    "ConfigurationError",
    "CircularDependencyError",
    "ProductionError",
    # Interfaces
    "IBindingTable",
    "IScope",
    "IResolver",
    "IInitializerRunner",
    # Models
    "Token",
    "create_token",
    "Inject",
    "Producer",
    "Capability",
    "Binding",
    "Bundle",
    "Feature",
]
