"""
Value Object equality.

Value types are compared structurally: two instances are equal when they are
of the same concrete type and their ordered equality components match
element-wise. Types opt in by implementing ``equality_components()`` and
decorating the class with ``@value_object``, which installs ``__eq__`` and
``__hash__`` built from the free functions below.
"""

from itertools import zip_longest
from typing import Any, Iterable, Protocol, Type, TypeVar, runtime_checkable

_HASH_SEED = 17
_HASH_MULTIPLIER = 31
_HASH_MASK = (1 << 64) - 1

# Distinguishes "sequence exhausted" from a component whose value is None.
_MISSING = object()

V = TypeVar("V")


@runtime_checkable
class SupportsEqualityComponents(Protocol):
    """Contract for types whose identity is their ordered component values."""

    def equality_components(self) -> Iterable[Any]:
        """Return the components that define equality, in a fixed order."""
        ...


def value_equals(left: SupportsEqualityComponents, right: Any) -> bool:
    """Compare two value objects by type and ordered components."""
    if right is None or type(left) is not type(right):
        return False
    for mine, theirs in zip_longest(
        left.equality_components(), right.equality_components(), fillvalue=_MISSING
    ):
        if mine is _MISSING or theirs is _MISSING:
            return False
        if mine != theirs:
            return False
    return True


def value_hash(obj: SupportsEqualityComponents) -> int:
    """Fold component hashes with an order-sensitive multiply-add combiner."""
    result = _HASH_SEED
    for component in obj.equality_components():
        component_hash = hash(component) if component is not None else 0
        result = (result * _HASH_MULTIPLIER + component_hash) & _HASH_MASK
    return hash((type(obj).__qualname__, result))


def value_object(cls: Type[V]) -> Type[V]:
    """Class decorator giving ``cls`` structural equality and hashing."""
    if not callable(getattr(cls, "equality_components", None)):
        raise TypeError(f"{cls.__name__} must define equality_components()")

    def __eq__(self: Any, other: Any) -> bool:
        if not isinstance(other, SupportsEqualityComponents):
            return NotImplemented
        return value_equals(self, other)

    def __hash__(self: Any) -> int:
        return value_hash(self)

    cls.__eq__ = __eq__  # type: ignore[assignment]
    cls.__hash__ = __hash__  # type: ignore[assignment]
    return cls
