"""
Testing utilities module.

Provides helpers for testing applications composed with stratum-di.
"""

from .utilities import ScopeFixture, TestScope, create_test_scope

__all__ = [
    "TestScope",
    "create_test_scope",
    "ScopeFixture",
]
