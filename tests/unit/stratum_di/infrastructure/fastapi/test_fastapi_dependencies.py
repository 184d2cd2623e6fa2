"""Unit tests for the FastAPI integration."""

import pytest

pytest.importorskip("fastapi")

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from stratum_di.application import Scope
from stratum_di.domain import Binding, Bundle, Multiplicity, ScopeState, create_token
from stratum_di.infrastructure.fastapi_integration import (
    RequestScopeMiddleware,
    create_root_dependency,
    create_scope_dependency,
)

GREETING = create_token("GREETING")
TAGS = create_token("TAGS", Multiplicity.MULTI)
REQUEST_ID = create_token("REQUEST_ID")


class TestCreateRootDependency:
    """Test cases for create_root_dependency."""

    def test_single_token(self):
        """Test resolving a single-valued token from a fixed scope."""
        root = Scope()
        root.apply_bundle(Bundle.of(Binding.value(GREETING, "hello")))

        assert create_root_dependency(root, GREETING)() == "hello"

    def test_multi_token(self):
        """Test that multi-valued tokens resolve to lists."""
        root = Scope()
        root.apply_bundle(Bundle.of(Binding.value(TAGS, "a"), Binding.value(TAGS, "b")))

        assert create_root_dependency(root, TAGS)() == ["a", "b"]

    def test_optional(self):
        """Test optional dependencies."""
        root = Scope()

        assert create_root_dependency(root, GREETING, optional=True)() is None
        assert create_root_dependency(root, TAGS, optional=True)() == []

    def test_in_route(self):
        """Test use with Depends()."""
        root = Scope()
        root.apply_bundle(Bundle.of(Binding.value(GREETING, "hello")))
        app = FastAPI()

        @app.get("/greet")
        def greet(greeting: str = Depends(create_root_dependency(root, GREETING))):
            return {"greeting": greeting}

        response = TestClient(app).get("/greet")

        assert response.json() == {"greeting": "hello"}


class TestRequestScopes:
    """Test cases for RequestScopeMiddleware and create_scope_dependency."""

    def _app(self, root):
        counter = iter(range(1, 100))
        bundle = Bundle.of(Binding.factory(REQUEST_ID, lambda scope: next(counter)))
        app = FastAPI()
        app.add_middleware(RequestScopeMiddleware, root=root, bundles=[bundle])
        get_request_id = create_scope_dependency(REQUEST_ID)
        get_greeting = create_scope_dependency(GREETING)

        @app.get("/id")
        def request_id(
            first: int = Depends(get_request_id),
            second: int = Depends(get_request_id),
            greeting: str = Depends(get_greeting),
        ):
            return {"first": first, "second": second, "greeting": greeting}

        return app

    def test_each_request_gets_its_own_scope(self):
        """Test that request-scoped values are shared within and fresh across requests."""
        root = Scope()
        root.apply_bundle(Bundle.of(Binding.value(GREETING, "hi")))
        client = TestClient(self._app(root))

        first = client.get("/id").json()
        second = client.get("/id").json()

        assert first == {"first": 1, "second": 1, "greeting": "hi"}
        assert second["first"] == 2

    def test_root_unaffected(self):
        """Test that request bundles stay out of the root scope."""
        root = Scope()
        root.apply_bundle(Bundle.of(Binding.value(GREETING, "hi")))
        client = TestClient(self._app(root))

        client.get("/id")

        assert not root.has_binding(REQUEST_ID)
        assert root.state != ScopeState.DESTROYED

    def test_missing_middleware(self):
        """Test the error raised without the middleware."""
        app = FastAPI()

        @app.get("/id")
        def request_id(value: int = Depends(create_scope_dependency(REQUEST_ID))):
            return {"id": value}

        with pytest.raises(RuntimeError) as exc_info:
            TestClient(app).get("/id")

        assert "RequestScopeMiddleware" in str(exc_info.value)
