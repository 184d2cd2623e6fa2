"""
FastAPI integration module.

Creates a child scope per request and exposes tokens as FastAPI dependencies.
"""

from .integration import RequestScopeMiddleware, create_root_dependency, create_scope_dependency

__all__ = [
    "create_root_dependency",
    "create_scope_dependency",
    "RequestScopeMiddleware",
]
