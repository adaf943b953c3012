# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigMap - a path-addressed configuration tree.

This module provides the ConfigMap class, the container at every level of a
configuration tree. Each entry maps a key to a CfgValue; MAP values hold
nested ConfigMaps and LIST values hold ordered CfgValues, so the whole tree
is reachable through slash-delimited paths.

Path Syntax:
    - Keys: 'server/http/port'
    - List indexes: 'servers/0/host' (the segment after a list is a
      non-negative decimal index; a leading '+' is accepted, '-' is not)
    - No normalization: '.', '..', empty segments and leading or trailing
      slashes are not special and simply fail to resolve

Lookups never raise: a missing key, a bad index or a segment that runs into
a scalar all give None. The only write that fails loudly is ``add`` under a
parent that is not a map (NotAMapError).

Defaults:
    ``default_path`` is a literal prefix. ``get_option('http', 'port')``
    tries 'http/port' first, then ``default_path + 'port'``; with
    ``default_path = 'default/'`` that is 'default/port'. The separator is
    not inserted for you.

Example:
    Basic usage::

        cfg = ConfigMap(default_path='default/')
        cfg.add('default', {'port': 8080})
        cfg.add('http', {})
        cfg.add('http/host', 'localhost')

        cfg.get('http/host')               # Str('localhost')
        cfg.get_option('http', 'port')     # Int(8080)
        check_that(cfg.get('http/port'), IsInt())  # False
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from ..conditions import Condition, IsMap, check_that
from ..exceptions import NotAMapError
from ..value import CfgValue

logger = logging.getLogger(__name__)

SEPARATOR = '/'


def _split_head(path: str) -> tuple[str, str | None]:
    """Split ``path`` at its first separator: ('a', 'b/c') for 'a/b/c'."""
    if SEPARATOR not in path:
        return path, None
    head, rest = path.split(SEPARATOR, 1)
    return head, rest


def _split_tail(path: str) -> tuple[str | None, str]:
    """Split ``path`` at its last separator: ('a/b', 'c') for 'a/b/c'."""
    if SEPARATOR not in path:
        return None, path
    parent, key = path.rsplit(SEPARATOR, 1)
    return parent, key


def _parse_index(segment: str) -> int | None:
    """Parse a list index segment: ASCII digits with an optional leading '+'."""
    digits = segment[1:] if segment.startswith('+') else segment
    if digits.isascii() and digits.isdigit():
        return int(digits)
    return None


class ConfigMap:
    """A configuration map addressable by slash-delimited paths.

    ConfigMap provides:
    - get(path) / get_mut(path): Resolve a path to a CfgValue or None
    - add(path, value): Insert under an existing map (no autocreate)
    - remove(path) / remove_if(path, condition): Delete entries
    - get_option / update_option: Category lookups with default fallback

    It also behaves like a mapping over its top-level keys (len, iteration,
    keys/values/items) with path-aware ``[]`` and ``in``.

    Attributes:
        default_path: Literal prefix for default option lookups.

    Example:
        >>> cfg = ConfigMap({'list': [{'field': 1}]})
        >>> cfg.get('list/0/field')
        Int(1)
        >>> cfg.get('list/1/field') is None
        True
    """

    __slots__ = ('_entries', 'default_path')

    def __init__(
        self,
        source: Mapping[str, Any] | None = None,
        default_path: str = '',
    ) -> None:
        """Initialize a ConfigMap.

        Args:
            source: Optional initial entries. Values may be CfgValues or
                plain Python objects (converted with ``CfgValue.detached``,
                so CfgValues are copied); nested dicts become nested ConfigMaps.
            default_path: Literal prefix used by ``get_option`` and
                ``update_option`` as the fallback location.

        Raises:
            TypeError: If a key is not a string or a value cannot be
                converted.
        """
        self._entries: dict[str, CfgValue] = {}
        self.default_path = default_path

        if source is not None:
            for key, value in source.items():
                if not isinstance(key, str):
                    raise TypeError(
                        f"ConfigMap keys must be str, not {type(key).__name__}"
                    )
                self._entries[key] = CfgValue.detached(value)

    @classmethod
    def with_entries(
        cls, entries: Mapping[str, Any], default_path: str = ''
    ) -> ConfigMap:
        """Build a ConfigMap from a mapping of keys to values."""
        return cls(entries, default_path=default_path)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_path: str = '') -> ConfigMap:
        """Build a ConfigMap from a nested dict of plain Python values.

        Example:
            >>> ConfigMap.from_dict({'db': {'port': 5432}}).get('db/port')
            Int(5432)
        """
        return cls(data, default_path=default_path)

    @classmethod
    def from_json(cls, document: Any) -> ConfigMap:
        """Build a ConfigMap from a document produced by ``json.load``."""
        from ..parsers import json_to_cfg
        return json_to_cfg(document)

    @classmethod
    def from_toml(cls, document: Any) -> ConfigMap:
        """Build a ConfigMap from a document produced by ``tomllib.load``."""
        from ..parsers import toml_to_cfg
        return toml_to_cfg(document)

    @classmethod
    def from_yaml(cls, document: Any) -> ConfigMap:
        """Build a ConfigMap from a document produced by ``yaml.safe_load``."""
        from ..parsers import yaml_to_cfg
        return yaml_to_cfg(document)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self.default_path:
            return f"ConfigMap({list(self._entries)}, default_path={self.default_path!r})"
        return f"ConfigMap({list(self._entries)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigMap):
            return NotImplemented
        return (
            self._entries == other._entries
            and self.default_path == other.default_path
        )

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        """Return the number of top-level entries."""
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys."""
        return iter(self._entries)

    def __contains__(self, path: object) -> bool:
        """Check whether a path resolves."""
        return isinstance(path, str) and self.contains_key(path)

    def __getitem__(self, path: str) -> CfgValue:
        """Get the value at ``path``.

        Raises:
            KeyError: If the path does not resolve.
        """
        value = self.get(path)
        if value is None:
            raise KeyError(path)
        return value

    def __setitem__(self, path: str, value: Any) -> None:
        """Insert ``value`` at ``path`` (see ``add``)."""
        self.add(path, value)

    def __delitem__(self, path: str) -> None:
        """Remove the entry at ``path``.

        Raises:
            KeyError: If there is nothing to remove.
        """
        if self.remove_entry(path) is None:
            raise KeyError(path)

    @property
    def entries(self) -> dict[str, CfgValue]:
        """The live top-level dict of entries."""
        return self._entries

    def clone(self) -> ConfigMap:
        """Return a deep copy of this map, ``default_path`` included."""
        copied = ConfigMap(default_path=self.default_path)
        for key, value in self._entries.items():
            copied._entries[key] = value.clone()
        return copied

    # ==================== Traversal ====================

    def _locate(self, path: str) -> tuple[dict[str, CfgValue] | list[CfgValue], str | int] | None:
        """Resolve ``path`` to the container holding it and its key or index.

        Returns:
            ``(container, key)`` with ``container[key]`` being the addressed
            value, or None if the path does not resolve.
        """
        head, rest = _split_head(path)
        node = self._entries.get(head)
        if node is None:
            return None
        if rest is None:
            return self._entries, head

        if node.is_map():
            return node.inner._locate(rest)

        if node.is_list():
            segment, remainder = _split_head(rest)
            index = _parse_index(segment)
            if index is None or index >= len(node.inner):
                return None
            if remainder is None:
                return node.inner, index
            element = node.inner[index]
            if element.is_map():
                return element.inner._locate(remainder)

        return None

    def get(self, path: str) -> CfgValue | None:
        """Get the value at ``path``, or None if it does not resolve.

        Args:
            path: Slash-delimited path; segments after a LIST are indexes.

        Returns:
            The CfgValue at the path, or None.

        Example:
            >>> cfg.get('package/name')
            Str('cfgmap')
            >>> cfg.get('person/0/name')
            Str('a')
        """
        slot = self._locate(path)
        if slot is None:
            return None
        container, key = slot
        return container[key]

    def get_mut(self, path: str) -> CfgValue | None:
        """Get the value at ``path`` for mutation.

        Resolves exactly like ``get`` and returns the live node: a MAP or
        LIST payload can be changed in place through it. To replace a value
        use ``add`` or ``update_option``.
        """
        slot = self._locate(path)
        if slot is None:
            return None
        container, key = slot
        return container[key]

    def contains_key(self, path: str) -> bool:
        """True if ``path`` resolves to a value."""
        return self.get(path) is not None

    # ==================== Mutation ====================

    def add(self, path: str, value: Any) -> CfgValue | None:
        """Insert ``value`` at ``path``.

        The parent of the final key must already exist and be a map;
        intermediate maps are never created.

        Args:
            path: Slash-delimited path. The part before the last '/' is the
                parent, the rest is the key.
            value: A CfgValue or a plain Python object. It is stored as a
                copy (``CfgValue.detached``), never shared with its source.

        Returns:
            The value previously stored under that key, or None.

        Raises:
            NotAMapError: If the parent does not resolve to a map. Nothing
                is inserted.

        Example:
            >>> cfg = ConfigMap()
            >>> cfg.add('a/b', 5)
            Traceback (most recent call last):
            NotAMapError: ...
            >>> cfg.add('a', {})
            >>> cfg.add('a/b', 5)
            >>> cfg.get('a/b')
            Int(5)
        """
        parent, key = _split_tail(path)
        if parent is None:
            previous = self._entries.get(key)
            self._entries[key] = CfgValue.detached(value)
            return previous

        subtree = self.get_mut(parent)
        if not check_that(subtree, IsMap()):
            logger.debug("Rejected add of %r: parent %r is not a map", path, parent)
            raise NotAMapError(path, parent)
        return subtree.inner.add(key, value)

    def remove(self, path: str) -> CfgValue | None:
        """Remove and return the value at ``path``, or None if absent."""
        entry = self.remove_entry(path)
        return entry[1] if entry is not None else None

    def remove_entry(self, path: str) -> tuple[str, CfgValue] | None:
        """Remove the entry at ``path`` and return ``(key, value)``.

        The parent is resolved like in ``add``; list elements cannot be
        removed through a path. Returns None if the parent is absent or not
        a map, or if the key is absent.
        """
        parent, key = _split_tail(path)
        if parent is None:
            target = self
        else:
            subtree = self.get_mut(parent)
            if not check_that(subtree, IsMap()):
                return None
            target = subtree.inner

        if key not in target._entries:
            return None
        return key, target._entries.pop(key)

    def remove_if(self, path: str, condition: Condition) -> CfgValue | None:
        """Remove the value at ``path`` only if it satisfies ``condition``.

        Example:
            >>> cfg.remove_if('server/port', IsInt())  # keeps a Str port
        """
        if check_that(self.get(path), condition):
            return self.remove(path)
        return None

    def remove_entry_if(
        self, path: str, condition: Condition
    ) -> tuple[str, CfgValue] | None:
        """Remove the entry at ``path`` only if it satisfies ``condition``."""
        if check_that(self.get(path), condition):
            return self.remove_entry(path)
        return None

    def clear(self) -> None:
        """Remove all top-level entries."""
        self._entries.clear()

    # ==================== Options ====================

    def _option_paths(self, category: str, option: str) -> tuple[str, str]:
        return f"{category}{SEPARATOR}{option}", f"{self.default_path}{option}"

    def get_option(self, category: str, option: str) -> CfgValue | None:
        """Get ``option`` from ``category``, falling back to the defaults.

        Tries '{category}/{option}', then '{default_path}{option}'.

        Example:
            >>> cfg.default_path = 'default/'
            >>> cfg.get_option('sub', 'opt')  # 'sub/opt' or 'default/opt'
        """
        qualified, fallback = self._option_paths(category, option)
        found = self.get(qualified)
        if found is None:
            found = self.get(fallback)
            if found is not None:
                logger.debug("Option %r resolved from default %r", qualified, fallback)
        return found

    def update_option(
        self, category: str, option: str, new_value: Any
    ) -> CfgValue | None:
        """Replace the value ``get_option`` would return.

        Resolution is the same as ``get_option``. Only an existing slot is
        replaced; nothing is ever inserted.

        Returns:
            The displaced value, or None if neither path resolves (no
            mutation happens in that case).
        """
        for candidate in self._option_paths(category, option):
            slot = self._locate(candidate)
            if slot is not None:
                container, key = slot
                previous = container[key]
                container[key] = CfgValue.detached(new_value)
                return previous
        logger.debug("Option %r/%r not found, nothing updated", category, option)
        return None

    # ==================== Iteration ====================

    def keys(self) -> list[str]:
        """Return the top-level keys."""
        return list(self._entries.keys())

    def values(self) -> list[CfgValue]:
        """Return the top-level values."""
        return list(self._entries.values())

    def items(self) -> list[tuple[str, CfgValue]]:
        """Return the top-level (key, value) pairs."""
        return list(self._entries.items())

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, CfgValue]]:
        """Walk the tree depth first.

        Yields ``(path, value)`` for every node reachable by ``get``: map
        entries, list elements (with an index segment) and the contents of
        maps nested inside lists.

        Example:
            >>> for path, value in cfg.walk():
            ...     print(path, value)
        """
        for key, value in self._entries.items():
            path = f"{_prefix}{SEPARATOR}{key}" if _prefix else key
            yield path, value
            yield from _walk_value(value, path)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain nested dict (see ``CfgValue.as_python``)."""
        return {key: value.as_python() for key, value in self._entries.items()}


def _walk_value(value: CfgValue, path: str) -> Iterator[tuple[str, CfgValue]]:
    if value.is_map():
        yield from value.inner.walk(path)
    elif value.is_list():
        for index, element in enumerate(value.inner):
            element_path = f"{path}{SEPARATOR}{index}"
            yield element_path, element
            if element.is_map():
                yield from element.inner.walk(element_path)
