from collections import abc
from typing import Any, Iterable, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from stratum_di.domain.interfaces import IBindingTable
from stratum_di.domain.models import Binding

BundleSource = Union["Bundle", Iterable[Any]]


class Bundle:
    """An opaque, immutable, ordered set of bindings.

    A bundle can only be applied to a binding table or combined with other
    bundles. Its bindings are never handed out.

    Example:
        >>> base = Bundle.of(Binding.value(API_URL, "https://example.test"))
        >>> extra = Bundle.of(Binding.value(PLUGINS, audit_plugin))
        >>> scope.apply_bundle(base + extra)
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Iterable[Binding] = ()) -> None:
        bindings = tuple(bindings)
        for binding in bindings:
            if not isinstance(binding, Binding):
                raise TypeError(f"Bundle entries must be Binding instances, got {type(binding).__name__}")
        object.__setattr__(self, "_bindings", bindings)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Bundle is immutable")

    @classmethod
    def of(cls, *bindings: Binding) -> "Bundle":
        return cls(bindings)

    @classmethod
    def empty(cls) -> "Bundle":
        return cls()

    def apply_to(self, table: IBindingTable) -> None:
        """Append every binding to the table, in order."""
        for binding in self._bindings:
            table.add_binding(binding)

    def combine(self, other: "Bundle") -> "Bundle":
        """Return a bundle holding this bundle's bindings followed by ``other``'s."""
        if not isinstance(other, Bundle):
            raise TypeError(f"Cannot combine Bundle with {type(other).__name__}")
        return Bundle(self._bindings + other._bindings)

    @classmethod
    def combine_all(cls, bundles: Iterable[BundleSource]) -> "Bundle":
        """Combine bundles in argument order.

        Nested sequences of bundles are flattened completely, so
        ``combine_all([a, [b, [c]]])`` equals ``combine_all([a, b, c])``.
        """
        collected: Tuple[Binding, ...] = ()
        for bundle in _flatten(bundles):
            collected += bundle._bindings
        return cls(collected)

    def __add__(self, other: "Bundle") -> "Bundle":
        if not isinstance(other, Bundle):
            return NotImplemented
        return self.combine(other)

    def __len__(self) -> int:
        return len(self._bindings)

    def __bool__(self) -> bool:
        return bool(self._bindings)

    def __repr__(self) -> str:
        return f"Bundle(<{len(self._bindings)} bindings>)"


def _flatten(items: Iterable[BundleSource]) -> Iterable[Bundle]:
    for item in items:
        if isinstance(item, Bundle):
            yield item
        elif isinstance(item, (str, bytes)) or not isinstance(item, abc.Iterable):
            raise TypeError(f"Cannot combine {type(item).__name__} into a Bundle")
        else:
            yield from _flatten(item)


class Feature(BaseModel):
    """A kind-tagged, optional bundle extension.

    The kind is only meaningful to the provider factory named by ``owner``;
    everyone else should treat a feature as opaque.

    Attributes:
        kind: Identifier used for cardinality and exclusion checks.
        owner: Name of the provider factory that issued the feature.
        bundle: Bindings folded in when the feature is accepted.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: str = Field(..., min_length=1, description="Feature kind identifier.")
    owner: str = Field(..., min_length=1, description="Name of the issuing provider factory.")
    bundle: Bundle = Field(default_factory=Bundle, description="Bindings contributed by the feature.")
