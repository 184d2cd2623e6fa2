"""
Application layer - Scopes, resolution and composition.

This layer orchestrates domain objects into a working scope tree.
It depends only on the Domain layer.
"""

from .binding_table import BindingTable
from .circular_detector import CircularDependencyDetector
from .initializer_runner import SCOPE_INITIALIZER, InitializerRunner, initializer
from .injector import ConstructorInjector
from .instance_cache import InstanceCache
from .provider_factory import ProviderFactory
from .resolver import Resolver
from .scope import Scope, create_scope

__all__ = [
    "Scope",
    "create_scope",
    "Resolver",
    "ConstructorInjector",
    "CircularDependencyDetector",
    "BindingTable",
    "InstanceCache",
    "InitializerRunner",
    "SCOPE_INITIALIZER",
    "initializer",
    "ProviderFactory",
]
