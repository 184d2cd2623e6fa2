import inspect
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stratum_di.domain.enums import CallStyle, Multiplicity, ProducerKind
from stratum_di.domain.exceptions import MultiplicityMismatchError


class Token(BaseModel):
    """Nominal identity for a requestable capability.

    Two tokens are equal only if they are the same object, even when their
    descriptions match.

    Attributes:
        description: Human-readable label used in error messages.
        multiplicity: Whether the token resolves to one value or a sequence.
    """

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., min_length=1, description="Human-readable label of the token.")
    multiplicity: Multiplicity = Field(
        default=Multiplicity.SINGLE,
        description="Whether the token resolves to one value or to a sequence.",
    )

    @property
    def is_multi(self) -> bool:
        return self.multiplicity == Multiplicity.MULTI

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"Token({self.description!r}, {self.multiplicity.value})"


def create_token(description: str, multiplicity: Multiplicity = Multiplicity.SINGLE) -> Token:
    """Create a new token.

    Args:
        description: Label used in error messages.
        multiplicity: SINGLE (default) or MULTI.

    Returns:
        A token distinct from every other token.

    Example:
        >>> DATABASE_URL = create_token("DATABASE_URL")
        >>> PLUGINS = create_token("PLUGINS", Multiplicity.MULTI)
    """
    return Token(description=description, multiplicity=multiplicity)


class Inject(BaseModel):
    """Marker placed in ``Annotated`` metadata of a constructor parameter.

    Example:
        >>> class Mailer:
        ...     def __init__(self, url: Annotated[str, Inject(token=SMTP_URL, optional=True)]):
        ...         self.url = url
    """

    model_config = ConfigDict(frozen=True)

    token: Token = Field(..., description="The token to resolve for the parameter.")
    optional: bool = Field(default=False, description="Inject None or [] instead of failing.")
    skip_self: bool = Field(default=False, description="Start the lookup at the parent scope.")
    self_only: bool = Field(default=False, description="Do not look beyond the starting scope.")


class Producer(BaseModel):
    """Tagged variant describing how a binding produces its value.

    Attributes:
        kind: VALUE, FACTORY or CONSTRUCTOR.
        target: The value, the factory callable or the class.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ProducerKind = Field(..., description="How the target is turned into a value.")
    target: Any = Field(..., description="The value, factory callable or class.")

    @model_validator(mode="after")
    def _check_target(self) -> "Producer":
        if self.kind == ProducerKind.FACTORY and not callable(self.target):
            raise ValueError("Factory producer target must be callable")
        if self.kind == ProducerKind.CONSTRUCTOR and not inspect.isclass(self.target):
            raise ValueError("Constructor producer target must be a class")
        return self

    @property
    def is_lazy(self) -> bool:
        return self.kind != ProducerKind.VALUE


class Capability(BaseModel):
    """A resolved exchangeable behaviour with a fixed call style.

    The style is chosen when the binding is built, so consumers only call
    :meth:`invoke` and never inspect the target themselves.

    Attributes:
        style: FUNCTION or METHOD.
        target: The callable or the method-bearing object.
        method_name: Name of the method for the METHOD style.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    style: CallStyle = Field(..., description="How the target is invoked.")
    target: Any = Field(..., description="Callable or method-bearing object.")
    method_name: Optional[str] = Field(default=None, description="Method invoked for the METHOD style.")

    @classmethod
    def function(cls, target: Callable[..., Any]) -> "Capability":
        return cls(style=CallStyle.FUNCTION, target=target)

    @classmethod
    def method(cls, target: Any, method_name: str) -> "Capability":
        return cls(style=CallStyle.METHOD, target=target, method_name=method_name)

    @classmethod
    def of(cls, target: Any, method_name: str) -> "Capability":
        """Wrap an existing callable or method-bearing object.

        Raises:
            TypeError: For classes, and for targets that are neither callable
                nor provide ``method_name``.
        """
        if inspect.isclass(target):
            raise TypeError(f"Expected an instance or a function, got class {target.__name__}")
        if callable(getattr(target, method_name, None)):
            return cls.method(target, method_name)
        if callable(target):
            return cls.function(target)
        raise TypeError(f"{target!r} is neither callable nor provides '{method_name}'")

    def invoke(self, *args: Any, **kwargs: Any) -> Any:
        """Call the capability with the given arguments."""
        if self.style == CallStyle.METHOD:
            return getattr(self.target, self.method_name)(*args, **kwargs)
        return self.target(*args, **kwargs)


class Binding(BaseModel):
    """A registered rule for producing a token's value within one scope.

    Attributes:
        token: The token this binding answers.
        multiplicity: Must match the token's multiplicity.
        producer: How the value is produced.
        call_style: When set, the produced value is wrapped in a Capability.
        method_name: Method used by the METHOD call style.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    token: Token = Field(..., description="The token this binding answers.")
    multiplicity: Multiplicity = Field(..., description="Single or multi binding.")
    producer: Producer = Field(..., description="How the value is produced.")
    call_style: Optional[CallStyle] = Field(
        default=None,
        description="Capability call style applied to the produced value.",
    )
    method_name: Optional[str] = Field(default=None, description="Method used by the METHOD call style.")

    @model_validator(mode="after")
    def _check_multiplicity(self) -> "Binding":
        if self.multiplicity != self.token.multiplicity:
            raise MultiplicityMismatchError(self.token, self.multiplicity)
        return self

    @classmethod
    def _create(cls, token: Token, kind: ProducerKind, target: Any, **extra: Any) -> "Binding":
        return cls(
            token=token,
            multiplicity=token.multiplicity,
            producer=Producer(kind=kind, target=target),
            **extra,
        )

    @classmethod
    def value(cls, token: Token, value: Any) -> "Binding":
        """Bind a ready-made value."""
        return cls._create(token, ProducerKind.VALUE, value)

    @classmethod
    def factory(cls, token: Token, factory: Callable[[Any], Any]) -> "Binding":
        """Bind a factory that receives the requesting scope."""
        return cls._create(token, ProducerKind.FACTORY, factory)

    @classmethod
    def constructor(cls, token: Token, target: type) -> "Binding":
        """Bind a class whose constructor parameters are auto-wired."""
        return cls._create(token, ProducerKind.CONSTRUCTOR, target)

    @classmethod
    def capability(cls, token: Token, target: Any, method_name: str) -> "Binding":
        """Bind an exchangeable behaviour, fixing its call style now.

        Args:
            token: The token to bind.
            target: A plain callable, an object with ``method_name``, or a
                class whose instances have ``method_name``.
            method_name: The method invoked on method-bearing targets.

        Raises:
            TypeError: If the target is neither callable nor method-bearing.

        Example:
            >>> Binding.capability(FORMATTER, lambda record: record.message, "format")
            >>> Binding.capability(FORMATTER, JsonFormatter, "format")
        """
        has_method = callable(getattr(target, method_name, None))
        if inspect.isclass(target):
            if not has_method:
                raise TypeError(f"{target.__name__} does not define '{method_name}'")
            return cls._create(
                token, ProducerKind.CONSTRUCTOR, target, call_style=CallStyle.METHOD, method_name=method_name
            )
        if has_method:
            return cls._create(token, ProducerKind.VALUE, target, call_style=CallStyle.METHOD, method_name=method_name)
        if callable(target):
            return cls._create(token, ProducerKind.VALUE, target, call_style=CallStyle.FUNCTION)
        raise TypeError(f"{target!r} is neither callable nor provides '{method_name}'")

    def wrap(self, produced: Any) -> Any:
        """Apply the binding's call style to a produced value."""
        if self.call_style is None:
            return produced
        return Capability(style=self.call_style, target=produced, method_name=self.method_name)
