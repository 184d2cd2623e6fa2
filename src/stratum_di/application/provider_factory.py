import logging
from collections import Counter
from typing import Any, Callable, Dict, FrozenSet, Generic, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from stratum_di.domain import (
    Binding,
    Bundle,
    ConfigurationError,
    Feature,
    FeatureCardinalityError,
    FeatureConflictError,
    UnknownFeatureError,
)

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=BaseModel)


class ProviderFactory(Generic[C]):
    """Turns a partial configuration and features into a bundle.

    The configuration contract is a pydantic model: every field is a
    recognized option and its default is the default value. Unknown options
    are rejected.

    Attributes:
        name: Identifier stamped on features this factory issues.
        config_model: Pydantic model describing the recognized options.
        _build: Derives the base bindings from a merged configuration.
        _feature_limits: Maximum features per kind; None means unbounded.
        _exclusive_kinds: Groups of kinds that cannot be combined.
        _allow_unknown_kinds: Accept kinds missing from ``_feature_limits``.
        _default_limit: Limit used for unknown kinds when they are accepted.

    Example:
        >>> class CacheConfig(BaseModel):
        ...     ttl: int = 60
        >>>
        >>> provide_cache = ProviderFactory(
        ...     "cache",
        ...     CacheConfig,
        ...     lambda config: [Binding.value(CACHE_CONFIG, config)],
        ...     feature_limits={"backend": 1},
        ... )
        >>> bundle = provide_cache({"ttl": 5}, provide_cache.feature("backend", redis_bundle))
    """

    def __init__(
        self,
        name: str,
        config_model: Type[C],
        build: Callable[[C], Iterable[Binding]],
        feature_limits: Optional[Mapping[str, Optional[int]]] = None,
        exclusive_kinds: Sequence[Iterable[str]] = (),
        allow_unknown_kinds: bool = False,
        default_limit: Optional[int] = 1,
    ) -> None:
        self.name = name
        self.config_model = config_model
        self._build = build
        self._feature_limits: Dict[str, Optional[int]] = dict(feature_limits or {})
        self._exclusive_kinds: List[FrozenSet[str]] = [frozenset(group) for group in exclusive_kinds]
        self._allow_unknown_kinds = allow_unknown_kinds
        self._default_limit = default_limit

    @property
    def defaults(self) -> C:
        """The default configuration."""
        return self.config_model()

    def merge_config(self, partial: Optional[Mapping[str, Any]] = None) -> C:
        """Merge a partial configuration over the defaults.

        Args:
            partial: Mapping of option names to explicit values.

        Returns:
            The merged configuration model.

        Raises:
            ConfigurationError: If an option is unknown or a value is invalid.
        """
        partial = dict(partial or {})
        unknown = set(partial) - set(self.config_model.model_fields)
        if unknown:
            raise ConfigurationError(
                f"Unknown options for provider '{self.name}': {', '.join(sorted(unknown))}",
                unknown,
            )

        defaults = self.defaults
        merged = {field: getattr(defaults, field) for field in self.config_model.model_fields}
        merged.update(partial)

        try:
            return self.config_model.model_validate(merged)
        except ValidationError as e:
            invalid = {str(error["loc"][0]) for error in e.errors() if error.get("loc")}
            raise ConfigurationError(f"Invalid options for provider '{self.name}': {e}", invalid) from e

    def feature(self, kind: str, bundle: Optional[Bundle] = None) -> Feature:
        """Issue a feature owned by this factory."""
        return Feature(kind=kind, owner=self.name, bundle=bundle if bundle is not None else Bundle.empty())

    def validate_features(self, features: Sequence[Feature]) -> None:
        """Check ownership, cardinality and exclusion rules.

        Raises:
            UnknownFeatureError: For a feature from another factory or of an
                undeclared kind.
            FeatureCardinalityError: If a kind is given more often than allowed.
            FeatureConflictError: If exclusive kinds are combined.
        """
        for feature in features:
            if not isinstance(feature, Feature):
                raise UnknownFeatureError(f"Provider '{self.name}' expected a Feature, got {type(feature).__name__}")
            if feature.owner != self.name:
                raise UnknownFeatureError(
                    f"Feature '{feature.kind}' belongs to provider '{feature.owner}', not '{self.name}'"
                )
            if feature.kind not in self._feature_limits and not self._allow_unknown_kinds:
                raise UnknownFeatureError(f"Provider '{self.name}' does not support feature '{feature.kind}'")

        counts = Counter(feature.kind for feature in features)
        for kind, count in counts.items():
            limit = self._feature_limits.get(kind, self._default_limit)
            if limit is not None and count > limit:
                raise FeatureCardinalityError(kind, count, limit)

        given = [feature.kind for feature in features]
        for group in self._exclusive_kinds:
            present = [kind for kind in dict.fromkeys(given) if kind in group]
            if len(present) > 1:
                raise FeatureConflictError(present)

    def __call__(self, partial_config: Optional[Mapping[str, Any]] = None, *features: Feature) -> Bundle:
        """Build the bundle for a configuration and an ordered list of features.

        Features are validated before any binding is built, so a rejected
        call produces nothing.

        Args:
            partial_config: Options overriding the defaults.
            *features: Features folded in after the base bindings, in order.

        Returns:
            The combined bundle.

        Raises:
            ConfigurationError: If the configuration is invalid.
            FeatureError: If the features break this factory's rules.
        """
        self.validate_features(features)
        config = self.merge_config(partial_config)

        base = Bundle(self._build(config))
        bundle = Bundle.combine_all([base, [feature.bundle for feature in features]])
        logger.debug(
            "Provider %s built %d bindings with features %s",
            self.name,
            len(bundle),
            [feature.kind for feature in features],
        )
        return bundle
