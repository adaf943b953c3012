# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Condition algebra for validating CfgValue shapes and contents.

Conditions form an expression tree. Leaves test the kind of a value, its
exact payload or the shape of a list; ``And``, ``Or`` and ``Not`` combine
them. ``execute(value)`` reduces a tree to one of the two constants ``TRUE``
or ``FALSE`` and ``to_bool()`` turns that into a bool.

Combining:
    - ``a & b`` or ``a.and_(b)``
    - ``a | b`` or ``a.or_(b)``
    - ``~a`` or ``a.not_()``

Both operands of ``And``/``Or`` are always evaluated. Evaluation never
raises: a kind mismatch is simply FALSE.

Example:
    >>> value = CfgValue.of([5, 8])
    >>> value.check_that(IsListWith(IsInt()) & IsListWithLength(2))
    True
    >>> check_that(None, IsInt())
    False
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .value import CfgValue, ValueKind

if TYPE_CHECKING:
    from .store import ConfigMap


class Condition:
    """Base class of every node in a condition tree.

    Subclasses implement ``_evaluate(value) -> bool`` and list their
    constructor arguments in ``_fields`` (used for repr and equality).
    """

    __slots__ = ()
    _fields: tuple[str, ...] = ()

    def execute(self, value: CfgValue) -> Condition:
        """Evaluate this condition against ``value``.

        Returns:
            ``TRUE`` or ``FALSE``.
        """
        return TRUE if self._evaluate(value) else FALSE

    def _evaluate(self, value: CfgValue) -> bool:
        raise NotImplementedError

    def to_bool(self) -> bool:
        """True only for the ``TRUE`` constant; anything else is False."""
        return False

    def and_(self, other: Condition) -> Condition:
        return And(self, other)

    def or_(self, other: Condition) -> Condition:
        return Or(self, other)

    def not_(self) -> Condition:
        return Not(self)

    def __and__(self, other: Condition) -> Condition:
        return self.and_(other)

    def __or__(self, other: Condition) -> Condition:
        return self.or_(other)

    def __invert__(self) -> Condition:
        return self.not_()

    def _args(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Condition):
            return NotImplemented
        return type(self) is type(other) and self._args() == other._args()

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        args = ', '.join(repr(arg) for arg in self._args())
        return f"{type(self).__name__}({args})"


def check_that(subject: CfgValue | None, condition: Condition) -> bool:
    """Check ``condition`` against a value that may be absent.

    Every ConfigMap lookup returns ``CfgValue | None``; absence is always
    False, a present value delegates to the condition.

    Example:
        >>> check_that(cfgmap.get('server/port'), IsInt())
    """
    if subject is None:
        return False
    return condition.execute(subject).to_bool()


# ==================== Constants ====================


class Constant(Condition):
    """A result condition: evaluates to itself whatever the input."""

    __slots__ = ('value',)
    _fields = ('value',)

    def __init__(self, value: bool) -> None:
        self.value = value

    def _evaluate(self, value: CfgValue) -> bool:
        return self.value

    def to_bool(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return 'TRUE' if self.value else 'FALSE'


TRUE = Constant(True)
FALSE = Constant(False)


# ==================== Type Tests ====================


class IsKind(Condition):
    """True if the value has the given kind."""

    __slots__ = ('kind',)
    _fields = ('kind',)

    def __init__(self, kind: ValueKind) -> None:
        self.kind = kind

    def _evaluate(self, value: CfgValue) -> bool:
        return value.kind is self.kind


class _FixedKind(IsKind):
    __slots__ = ()
    _fields = ()
    _kind: ValueKind

    def __init__(self) -> None:
        super().__init__(self._kind)


class IsInt(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.INT


class IsFloat(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.FLOAT


class IsStr(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.STR


class IsBool(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.BOOL


class IsMap(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.MAP


class IsList(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.LIST


class IsNull(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.NULL


class IsDatetime(_FixedKind):
    __slots__ = ()
    _kind = ValueKind.DATETIME


# ==================== Exact Values ====================


class IsExactly(Condition):
    """True if the value has the given kind and an equal payload."""

    __slots__ = ('kind', 'expected')
    _fields = ('kind', 'expected')

    def __init__(self, kind: ValueKind, expected: Any) -> None:
        self.kind = kind
        self.expected = expected

    def _evaluate(self, value: CfgValue) -> bool:
        return value.kind is self.kind and value.inner == self.expected


class _Unmatchable:
    """Wrapper for an expected value that no payload can equal."""

    __slots__ = ('raw',)

    def __init__(self, raw: Any) -> None:
        self.raw = raw

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Unmatchable) and self.raw == other.raw

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(self.raw)


class _ExactlyOf(IsExactly):
    __slots__ = ()
    _fields = ('expected',)
    _kind: ValueKind

    def __init__(self, expected: Any) -> None:
        # An expected value the kind cannot hold is kept as given and
        # never compares equal to a payload of that kind.
        try:
            expected = CfgValue(self._kind, expected).inner
        except (TypeError, OverflowError):
            expected = _Unmatchable(expected)
        super().__init__(self._kind, expected)


class IsExactlyInt(_ExactlyOf):
    __slots__ = ()
    _kind = ValueKind.INT


class IsExactlyFloat(_ExactlyOf):
    __slots__ = ()
    _kind = ValueKind.FLOAT


class IsExactlyStr(_ExactlyOf):
    __slots__ = ()
    _kind = ValueKind.STR


class IsExactlyList(_ExactlyOf):
    """Exact list match; ``expected`` may hold plain Python items."""

    __slots__ = ()
    _kind = ValueKind.LIST


class IsExactlyMap(_ExactlyOf):
    """Exact map match against a ConfigMap (or a dict, converted)."""

    __slots__ = ()
    _kind = ValueKind.MAP

    def __init__(self, expected: ConfigMap | dict[str, Any]) -> None:
        super().__init__(expected)


class IsTrue(IsExactly):
    """True if the value is ``Bool(True)``."""

    __slots__ = ()
    _fields = ()

    def __init__(self) -> None:
        super().__init__(ValueKind.BOOL, True)


# ==================== Lists ====================


class IsListWith(Condition):
    """True if the value is a list whose every element satisfies ``inner``.

    An empty list is vacuously true. Every element is evaluated.
    """

    __slots__ = ('inner',)
    _fields = ('inner',)

    def __init__(self, inner: Condition) -> None:
        self.inner = inner

    def _evaluate(self, value: CfgValue) -> bool:
        if not value.is_list():
            return False
        results = [self.inner.execute(item).to_bool() for item in value.inner]
        return all(results)


class IsListWithLength(Condition):
    """True if the value is a list of exactly ``length`` elements."""

    __slots__ = ('length',)
    _fields = ('length',)

    def __init__(self, length: int) -> None:
        self.length = length

    def _evaluate(self, value: CfgValue) -> bool:
        return value.is_list() and len(value.inner) == self.length


# ==================== Combinators ====================


class And(Condition):
    __slots__ = ('left', 'right')
    _fields = ('left', 'right')

    def __init__(self, left: Condition, right: Condition) -> None:
        self.left = left
        self.right = right

    def _evaluate(self, value: CfgValue) -> bool:
        left = self.left.execute(value).to_bool()
        right = self.right.execute(value).to_bool()
        return left and right


class Or(Condition):
    __slots__ = ('left', 'right')
    _fields = ('left', 'right')

    def __init__(self, left: Condition, right: Condition) -> None:
        self.left = left
        self.right = right

    def _evaluate(self, value: CfgValue) -> bool:
        left = self.left.execute(value).to_bool()
        right = self.right.execute(value).to_bool()
        return left or right


class Not(Condition):
    __slots__ = ('inner',)
    _fields = ('inner',)

    def __init__(self, inner: Condition) -> None:
        self.inner = inner

    def _evaluate(self, value: CfgValue) -> bool:
        return not self.inner.execute(value).to_bool()
