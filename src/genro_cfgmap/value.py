# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CfgValue - the tagged value stored in every ConfigMap slot.

A CfgValue is a closed tagged union: a ``kind`` (one of ValueKind) and the
payload for that kind (``inner``). Scalars carry plain Python objects, a MAP
carries a ConfigMap and a LIST carries a list of CfgValue, so values form a
strictly owned tree.

Kinds:
    - INT: int in the signed 64-bit range
    - FLOAT: float
    - STR: str
    - BOOL: bool
    - MAP: ConfigMap
    - LIST: list[CfgValue], heterogeneous
    - DATETIME: datetime.datetime, datetime.date or datetime.time
    - NULL, BAD_VALUE: no payload
    - ALIAS: int back-reference id

Example:
    >>> value = CfgValue.of([1, 2.5, 'three'])
    >>> value.is_list()
    True
    >>> value.as_list()[1].to_int()
    2
"""

from __future__ import annotations

import datetime
import math
import random
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .conditions import Condition
    from .store import ConfigMap


INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class ValueKind(Enum):
    """Discriminant of a CfgValue."""

    INT = 'Int'
    FLOAT = 'Float'
    STR = 'Str'
    BOOL = 'Bool'
    MAP = 'Map'
    LIST = 'List'
    DATETIME = 'Datetime'
    NULL = 'Null'
    BAD_VALUE = 'BadValue'
    ALIAS = 'Alias'


_NO_PAYLOAD = (ValueKind.NULL, ValueKind.BAD_VALUE)
_DATETIME_TYPES = (datetime.datetime, datetime.date, datetime.time)


def _is_plain_int(obj: Any) -> bool:
    return isinstance(obj, int) and not isinstance(obj, bool)


def _check_int_range(number: int) -> int:
    if number < INT_MIN or number > INT_MAX:
        raise OverflowError(f"Integer {number} does not fit in 64 bits")
    return number


class CfgValue:
    """A typed value in a ConfigMap tree.

    Build values with ``CfgValue.of()`` for plain Python objects, or with the
    named constructors for tags that cannot be inferred (``null()``,
    ``bad_value()``, ``alias()``, ``from_datetime()``). The constructor takes an
    explicit kind and validates the payload.

    Attributes:
        kind: The ValueKind discriminant.
        inner: The payload (None for NULL and BAD_VALUE).

    Example:
        >>> CfgValue(ValueKind.INT, 5)
        Int(5)
        >>> CfgValue.of(True).is_bool()
        True
    """

    __slots__ = ('kind', 'inner')

    def __init__(self, kind: ValueKind, inner: Any = None) -> None:
        """Initialize a CfgValue.

        Args:
            kind: The value kind.
            inner: The payload. LIST payloads may hold plain Python objects,
                which are converted element by element; MAP payloads may be
                a dict, which is converted to a ConfigMap.

        Raises:
            TypeError: If the payload does not match the kind.
            OverflowError: If an INT payload is outside the 64-bit range.
        """
        self.kind = kind
        self.inner = self._coerce_payload(kind, inner)

    @staticmethod
    def _coerce_payload(kind: ValueKind, inner: Any) -> Any:
        from .store import ConfigMap

        if kind is ValueKind.INT and _is_plain_int(inner):
            return _check_int_range(inner)
        if kind is ValueKind.FLOAT:
            if isinstance(inner, float):
                return inner
            if _is_plain_int(inner):
                return float(inner)
        if kind is ValueKind.STR and isinstance(inner, str):
            return inner
        if kind is ValueKind.BOOL and isinstance(inner, bool):
            return inner
        if kind is ValueKind.MAP:
            if isinstance(inner, ConfigMap):
                return inner
            if isinstance(inner, dict):
                return ConfigMap.from_dict(inner)
        if kind is ValueKind.LIST and isinstance(inner, (list, tuple)):
            return [CfgValue.detached(item) for item in inner]
        if kind is ValueKind.DATETIME and isinstance(inner, _DATETIME_TYPES):
            return inner
        if kind in _NO_PAYLOAD and inner is None:
            return None
        if kind is ValueKind.ALIAS and _is_plain_int(inner) and inner >= 0:
            return inner
        raise TypeError(
            f"Invalid payload for {kind.value}: {type(inner).__name__}"
        )

    # ==================== Construction ====================

    @classmethod
    def of(cls, obj: Any) -> CfgValue:
        """Convert a plain Python object to a CfgValue.

        Conversion table:
            - CfgValue: returned unchanged
            - bool: BOOL
            - int: INT (must fit in 64 bits)
            - float: FLOAT
            - str: STR
            - list, tuple: LIST, elements converted recursively
            - dict, ConfigMap: MAP
            - None: NULL
            - datetime, date, time: DATETIME

        Args:
            obj: The object to convert.

        Returns:
            The corresponding CfgValue.

        Raises:
            TypeError: If the object has no CfgValue counterpart.
            OverflowError: If an int is outside the 64-bit range.
        """
        from .store import ConfigMap

        if isinstance(obj, CfgValue):
            return obj
        if isinstance(obj, bool):
            return cls(ValueKind.BOOL, obj)
        if isinstance(obj, int):
            return cls(ValueKind.INT, obj)
        if isinstance(obj, float):
            return cls(ValueKind.FLOAT, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STR, obj)
        if isinstance(obj, (list, tuple)):
            return cls(ValueKind.LIST, obj)
        if isinstance(obj, (dict, ConfigMap)):
            return cls(ValueKind.MAP, obj)
        if obj is None:
            return cls(ValueKind.NULL)
        if isinstance(obj, _DATETIME_TYPES):
            return cls(ValueKind.DATETIME, obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to CfgValue")

    @classmethod
    def detached(cls, obj: Any) -> CfgValue:
        """Convert ``obj`` like ``of()``, but never reuse an existing node.

        CfgValue and ConfigMap arguments are cloned, so the result shares
        nothing with its source. This is how values enter a tree: inserting
        the same value twice, or a map under itself, stores independent
        copies.
        """
        from .store import ConfigMap

        if isinstance(obj, CfgValue):
            return obj.clone()
        if isinstance(obj, ConfigMap):
            return cls(ValueKind.MAP, obj.clone())
        return cls.of(obj)

    @classmethod
    def null(cls) -> CfgValue:
        """Return a NULL value."""
        return cls(ValueKind.NULL)

    @classmethod
    def bad_value(cls) -> CfgValue:
        """Return a BAD_VALUE marker."""
        return cls(ValueKind.BAD_VALUE)

    @classmethod
    def alias(cls, ref: int) -> CfgValue:
        """Return an ALIAS value referencing anchor id ``ref``."""
        return cls(ValueKind.ALIAS, ref)

    @classmethod
    def from_datetime(
        cls, moment: datetime.datetime | datetime.date | datetime.time
    ) -> CfgValue:
        """Return a DATETIME value."""
        return cls(ValueKind.DATETIME, moment)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self.kind in _NO_PAYLOAD:
            return self.kind.value
        return f"{self.kind.value}({self.inner!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CfgValue):
            return NotImplemented
        return self.kind is other.kind and self.inner == other.inner

    __hash__ = None  # type: ignore[assignment]

    # ==================== Type Tests ====================

    def is_int(self) -> bool:
        return self.kind is ValueKind.INT

    def is_float(self) -> bool:
        return self.kind is ValueKind.FLOAT

    def is_str(self) -> bool:
        return self.kind is ValueKind.STR

    def is_bool(self) -> bool:
        return self.kind is ValueKind.BOOL

    def is_map(self) -> bool:
        return self.kind is ValueKind.MAP

    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    def is_datetime(self) -> bool:
        return self.kind is ValueKind.DATETIME

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def is_bad_value(self) -> bool:
        return self.kind is ValueKind.BAD_VALUE

    def is_alias(self) -> bool:
        return self.kind is ValueKind.ALIAS

    # ==================== Accessors ====================

    def _inner_if(self, kind: ValueKind) -> Any:
        return self.inner if self.kind is kind else None

    def as_int(self) -> int | None:
        return self._inner_if(ValueKind.INT)

    def as_float(self) -> float | None:
        return self._inner_if(ValueKind.FLOAT)

    def as_str(self) -> str | None:
        return self._inner_if(ValueKind.STR)

    def as_bool(self) -> bool | None:
        return self._inner_if(ValueKind.BOOL)

    def as_map(self) -> ConfigMap | None:
        """Return the ConfigMap payload, or None if this is not a MAP.

        The returned map is the live child, so mutating it mutates the tree.
        """
        return self._inner_if(ValueKind.MAP)

    def as_list(self) -> list[CfgValue] | None:
        """Return the list payload, or None if this is not a LIST.

        The returned list is the live child, so mutating it mutates the tree.
        """
        return self._inner_if(ValueKind.LIST)

    as_map_mut = as_map
    as_list_mut = as_list

    def as_datetime(self) -> datetime.datetime | datetime.date | datetime.time | None:
        return self._inner_if(ValueKind.DATETIME)

    def as_alias(self) -> int | None:
        return self._inner_if(ValueKind.ALIAS)

    # ==================== Coercions ====================

    def to_int(self) -> int | None:
        """Return the value as an int.

        INT is returned unchanged, FLOAT is truncated toward zero and
        saturated to the 64-bit range (NaN becomes 0). Other kinds give None.
        """
        if self.kind is ValueKind.INT:
            return self.inner
        if self.kind is ValueKind.FLOAT:
            if math.isnan(self.inner):
                return 0
            if self.inner >= INT_MAX:
                return INT_MAX
            if self.inner <= INT_MIN:
                return INT_MIN
            return int(self.inner)
        return None

    def to_float(self) -> float | None:
        """Return the value as a float (FLOAT unchanged, INT converted)."""
        if self.kind is ValueKind.FLOAT:
            return self.inner
        if self.kind is ValueKind.INT:
            return float(self.inner)
        return None

    def as_python(self) -> Any:
        """Convert to plain Python objects (recursive).

        MAP becomes a dict, LIST a list, NULL and BAD_VALUE become None and
        ALIAS its integer id.
        """
        if self.kind is ValueKind.MAP:
            return self.inner.as_dict()
        if self.kind is ValueKind.LIST:
            return [item.as_python() for item in self.inner]
        return self.inner

    def clone(self) -> CfgValue:
        """Return a deep copy of this value (maps and lists are rebuilt)."""
        if self.kind is ValueKind.MAP:
            return CfgValue(ValueKind.MAP, self.inner.clone())
        if self.kind is ValueKind.LIST:
            return CfgValue(ValueKind.LIST, [item.clone() for item in self.inner])
        return CfgValue(self.kind, self.inner)

    # ==================== Navigation ====================

    def get(self, path: str) -> CfgValue | None:
        """Look up ``path`` inside this value if it is a MAP, else None."""
        submap = self.as_map()
        return submap.get(path) if submap is not None else None

    def get_mut(self, path: str) -> CfgValue | None:
        """Mutable-access counterpart of ``get``."""
        submap = self.as_map()
        return submap.get_mut(path) if submap is not None else None

    # ==================== Conditions ====================

    def check_that(self, condition: Condition) -> bool:
        """Return True if this value satisfies ``condition``.

        Example:
            >>> CfgValue.of(5).check_that(IsInt() | IsFloat())
            True
        """
        return condition.execute(self).to_bool()

    # ==================== Generators ====================

    def _generate(
        self,
        element: Condition,
        draw: Callable[[Any, Any], Any],
    ) -> Any:
        from .conditions import IsListWith, IsListWithLength

        def shaped(length: int) -> Condition:
            return IsListWith(element) & IsListWithLength(length)

        if self.check_that(element):
            return self.inner
        if self.check_that(shaped(1)):
            return self.inner[0].inner
        if self.check_that(shaped(2)):
            low, high = (item.inner for item in self.inner)
            return draw(low, high)
        return None

    def generate_int(self, rng: random.Random | None = None) -> int | None:
        """Produce an int from this value.

        - INT: the value itself
        - [INT]: its only element
        - [min, max] of INT: a random int in [min, max)
        - anything else: None

        Args:
            rng: Optional random generator (defaults to the ``random`` module).

        Raises:
            ValueError: If a range is empty (min >= max).
        """
        from .conditions import IsInt

        source = rng or random
        return self._generate(IsInt(), source.randrange)

    def generate_float(self, rng: random.Random | None = None) -> float | None:
        """Produce a float from this value.

        Same shapes as ``generate_int`` with FLOAT elements; ranges are drawn
        with ``uniform``.
        """
        from .conditions import IsFloat

        source = rng or random
        return self._generate(IsFloat(), source.uniform)
