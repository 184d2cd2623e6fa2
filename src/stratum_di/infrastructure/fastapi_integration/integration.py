import logging
from typing import Any, Awaitable, Callable, Optional, Sequence

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stratum_di.application import Scope
from stratum_di.domain import Bundle, IScope, Token

logger = logging.getLogger(__name__)


def create_root_dependency(scope: IScope, token: Token, optional: bool = False) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable resolving ``token`` from a fixed scope.

    Args:
        scope: The scope to resolve from, usually the application root.
        token: The single- or multi-valued token to resolve.
        optional: Return None or [] instead of failing when nothing is bound.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> root = create_scope(None, provide_logger())
        >>> get_logger = create_root_dependency(root, LOGGER)
        >>>
        >>> @app.get("/health")
        >>> def health(log: Logger = Depends(get_logger)):
        ...     log.debug("health check")
        ...     return {"status": "ok"}
    """

    def dependency() -> Any:
        return _resolve(scope, token, optional)

    return dependency


def create_scope_dependency(token: Token, optional: bool = False) -> Callable[[Request], Any]:
    """Create a FastAPI dependency resolving ``token`` from the request scope.

    Requires the RequestScopeMiddleware to be installed.

    Args:
        token: The single- or multi-valued token to resolve.
        optional: Return None or [] instead of failing when nothing is bound.

    Returns:
        A callable that resolves from the request's scope.

    Example:
        >>> app.add_middleware(RequestScopeMiddleware, root=root, bundles=[provide_request_context()])
        >>>
        >>> get_request_context = create_scope_dependency(REQUEST_CONTEXT)
        >>>
        >>> @app.get("/whoami")
        >>> def whoami(ctx: RequestContext = Depends(get_request_context)):
        ...     return {"user": ctx.user}
    """

    def scoped_dependency(request: Request) -> Any:
        if not hasattr(request.state, "scope"):
            raise RuntimeError("Request does not have a scope. Did you forget to add RequestScopeMiddleware?")
        return _resolve(request.state.scope, token, optional)

    return scoped_dependency


class RequestScopeMiddleware(BaseHTTPMiddleware):
    """Middleware that creates a child scope for each request.

    The child scope receives ``bundles``, is made ready and is stored on
    ``request.state.scope``. It is destroyed once the response is produced.

    Attributes:
        root: The scope every request scope descends from.
        bundles: Bundles applied to each request scope, in order.

    Example:
        >>> root = create_scope(None, provide_logger())
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(
        ...     RequestScopeMiddleware,
        ...     root=root,
        ...     bundles=[provide_logger({"name": "request", "chaining": True})],
        ... )
    """

    def __init__(self, app: FastAPI, root: Scope, bundles: Optional[Sequence[Bundle]] = None):
        super().__init__(app)
        self.root = root
        self.bundles = list(bundles or [])

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        scope = Scope(self.root, name=f"request:{request.url.path}")
        try:
            for bundle in self.bundles:
                scope.apply_bundle(bundle)
            scope.mark_ready()
            request.state.scope = scope
            return await call_next(request)
        finally:
            scope.destroy()
            logger.debug("Closed request scope %s", scope.name)


def _resolve(scope: IScope, token: Token, optional: bool) -> Any:
    if token.is_multi:
        return scope.resolve_all(token, optional=optional)
    return scope.resolve(token, optional=optional)
