from typing import Any, Callable, Optional, Tuple

from stratum_di.application import Scope
from stratum_di.domain import Binding, Bundle, IScope, Token


class TestScope(Scope):
    """Scope for tests with override helpers.

    A test scope is a child of the scope under test (or a root), so its
    overrides shadow the production bindings without touching them.
    Overrides must be registered before the first resolution.

    Example:
        >>> root = create_scope(None, provide_logger(), provide_mailer())
        >>>
        >>> def test_signup_sends_mail():
        ...     with TestScope(root) as scope:
        ...         fake = FakeMailer()
        ...         scope.override_value(MAILER, fake)
        ...
        ...         scope.resolve(SIGNUP_SERVICE).register("ada@example.test")
        ...         assert fake.sent
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent: Optional[IScope] = None, name: Optional[str] = None) -> None:
        super().__init__(parent, name=name or "test")

    def override_value(self, token: Token, value: Any) -> None:
        """Bind ``value`` to ``token`` in this scope."""
        self.override_binding(Binding.value(token, value))

    def override_factory(self, token: Token, factory: Callable[[IScope], Any]) -> None:
        """Bind a factory receiving this scope to ``token``."""
        self.override_binding(Binding.factory(token, factory))

    def override_binding(self, binding: Binding) -> None:
        self.apply_bundle(Bundle.of(binding))


def create_test_scope(*overrides: Tuple[Token, Any], parent: Optional[IScope] = None) -> TestScope:
    """Create a ready test scope from ``(token, value)`` pairs.

    Example:
        >>> scope = create_test_scope((API_URL, "http://fake"), (CLOCK, lambda: 0.0), parent=root)
        >>> assert scope.resolve(API_URL) == "http://fake"
    """
    scope = TestScope(parent)
    for token, value in overrides:
        scope.override_value(token, value)
    scope.mark_ready()
    return scope


class ScopeFixture:
    """Context manager yielding a ready child scope and destroying it on exit.

    Example:
        >>> with ScopeFixture(root, provide_logger({"name": "job"})) as scope:
        ...     scope.resolve(LOGGER).info("running")
        ... # The child scope is destroyed here
    """

    def __init__(self, parent: Optional[IScope], *bundles: Bundle, name: Optional[str] = None) -> None:
        self._parent = parent
        self._bundles = bundles
        self._name = name
        self._scope: Optional[Scope] = None

    def __enter__(self) -> Scope:
        self._scope = Scope(self._parent, name=self._name)
        for bundle in self._bundles:
            self._scope.apply_bundle(bundle)
        self._scope.mark_ready()
        return self._scope

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if self._scope is not None:
            self._scope.destroy()
            self._scope = None
        return False
