import inspect
from typing import Annotated, Any, Dict, Optional, get_args, get_origin, get_type_hints

from stratum_di.domain import Inject, IScope, Token


class ConstructorInjector:
    """Instantiates classes bound with a constructor producer.

    Constructor parameters are wired from ``Annotated`` metadata: either a
    bare :class:`Token` or an :class:`Inject` marker. Parameters without a
    marker keep their default value.

    Example:
        >>> class ReportService:
        ...     def __init__(
        ...         self,
        ...         repository: Annotated[Repository, REPOSITORY],
        ...         exporters: Annotated[list, EXPORTERS],
        ...         audit: Annotated[Optional[Audit], Inject(token=AUDIT, optional=True)],
        ...         page_size: int = 50,
        ...     ):
        ...         ...
        >>>
        >>> injector = ConstructorInjector()
        >>> service = injector.instantiate(ReportService, scope)
    """

    def instantiate(self, cls: type, scope: IScope) -> Any:
        """Create an instance of ``cls`` with its markers resolved from ``scope``.

        Args:
            cls: The class to instantiate.
            scope: The scope the instance is produced for.

        Returns:
            The new instance.

        Raises:
            TypeError: If a parameter has neither a marker nor a default.
        """
        signature = inspect.signature(cls.__init__)
        type_hints = get_type_hints(cls.__init__, include_extras=True)

        kwargs: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            marker = injection_marker(type_hints.get(param_name))
            if marker is None:
                if param.default is not inspect.Parameter.empty:
                    continue
                raise TypeError(
                    f"Parameter '{param_name}' of {cls.__name__} has no injection marker and no default value"
                )

            kwargs[param_name] = resolve_marker(scope, marker)

        return cls(**kwargs)


def injection_marker(annotation: Any) -> Optional[Inject]:
    """Extract the injection marker from an ``Annotated`` hint, if any."""
    if annotation is None or get_origin(annotation) is not Annotated:
        return None

    for metadata in get_args(annotation)[1:]:
        if isinstance(metadata, Inject):
            return metadata
        if isinstance(metadata, Token):
            return Inject(token=metadata)
    return None


def resolve_marker(scope: IScope, marker: Inject) -> Any:
    if marker.token.is_multi:
        return scope.resolve_all(
            marker.token, optional=marker.optional, skip_self=marker.skip_self, self_only=marker.self_only
        )
    return scope.resolve(marker.token, optional=marker.optional, skip_self=marker.skip_self, self_only=marker.self_only)
