from typing import Dict, List

from stratum_di.domain import Binding, IBindingTable, Token


class BindingTable(IBindingTable):
    """Ordered mapping of tokens to the bindings registered for them.

    Attributes:
        _bindings: Bindings per token, in registration order.
    """

    def __init__(self) -> None:
        self._bindings: Dict[Token, List[Binding]] = {}

    def add_binding(self, binding: Binding) -> None:
        self._bindings.setdefault(binding.token, []).append(binding)

    def bindings_for(self, token: Token) -> List[Binding]:
        return list(self._bindings.get(token, ()))

    def has(self, token: Token) -> bool:
        return bool(self._bindings.get(token))

    def tokens(self) -> List[Token]:
        """Tokens with at least one binding, in first-registration order."""
        return [token for token, bindings in self._bindings.items() if bindings]

    def clear(self) -> None:
        self._bindings.clear()

    def __len__(self) -> int:
        return sum(len(bindings) for bindings in self._bindings.values())
