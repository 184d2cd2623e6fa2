from enum import Enum


class Multiplicity(str, Enum):
    """Defines how many bindings a token resolves to.

    Attributes:
        SINGLE: The nearest, last-registered binding wins.
        MULTI: Every binding along the scope chain contributes, root first.
    """

    SINGLE = "single"
    MULTI = "multi"

    def __str__(self) -> str:
        return self.value


class ProducerKind(str, Enum):
    """Defines how a binding produces its value.

    Attributes:
        VALUE: The stored value is returned as-is.
        FACTORY: A callable receiving the requesting scope.
        CONSTRUCTOR: A class instantiated with auto-wired parameters.
    """

    VALUE = "value"
    FACTORY = "factory"
    CONSTRUCTOR = "constructor"

    def __str__(self) -> str:
        return self.value


class CallStyle(str, Enum):
    """Defines how a capability is invoked.

    Attributes:
        FUNCTION: The target is called directly.
        METHOD: A named method of the target is called.
    """

    FUNCTION = "function"
    METHOD = "method"

    def __str__(self) -> str:
        return self.value


class ScopeState(str, Enum):
    """Lifecycle states of a scope."""

    BUILDING = "building"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
    DESTROYED = "destroyed"

    def __str__(self) -> str:
        return self.value
