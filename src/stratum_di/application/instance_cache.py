from typing import Any, Callable, Dict, Hashable, Tuple

from stratum_di.domain import Binding, ProductionError, StratumError

_MISSING = object()


class InstanceCache:
    """Per-scope cache of produced values.

    Each binding is produced at most once per scope. Resolved results are
    memoised separately, keyed by the lookup that produced them, so repeated
    lookups skip the scope walk.

    Attributes:
        _instances: Produced values keyed by ``id(binding)``.
        _resolved: Memoised lookup results.
    """

    def __init__(self) -> None:
        self._instances: Dict[int, Tuple[Binding, Any]] = {}
        self._resolved: Dict[Hashable, Any] = {}

    def get_or_create(self, binding: Binding, factory: Callable[[], Any]) -> Any:
        """Return the value produced for ``binding``, creating it if needed.

        Args:
            binding: The winning binding.
            factory: Produces the raw value.

        Returns:
            The produced value, wrapped in a Capability when the binding
            declares a call style.

        Raises:
            ProductionError: If the factory raises anything other than an
                engine error.
        """
        entry = self._instances.get(id(binding))
        if entry is not None and entry[0] is binding:
            return entry[1]

        try:
            value = binding.wrap(factory())
        except StratumError:
            raise
        except Exception as e:
            raise ProductionError(binding.token, f"Failed to create instance: {e}") from e

        self._instances[id(binding)] = (binding, value)
        return value

    def lookup(self, key: Hashable) -> Any:
        """Return a memoised result or the module-level ``_MISSING`` sentinel."""
        return self._resolved.get(key, _MISSING)

    def remember(self, key: Hashable, value: Any) -> None:
        self._resolved[key] = value

    def clear(self) -> None:
        self._instances.clear()
        self._resolved.clear()

    def __len__(self) -> int:
        return len(self._instances)


def is_missing(value: Any) -> bool:
    return value is _MISSING
