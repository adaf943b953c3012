# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DocumentConverter - base class for format adapters.

An adapter receives a document already parsed by a format library (json,
tomllib, PyYAML) and turns it into a ConfigMap. The walk over mappings and
sequences is shared; subclasses override the hooks for what their format
adds:

    - convert_key(key): map keys (must end up as str)
    - convert_null(): the format's null, if it has one
    - convert_other(value): anything that is not a JSON-like scalar,
      sequence or mapping (dates, binary blobs, ...)

The top-level document must be a mapping; anything else raises
InvalidRootError.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..exceptions import InvalidRootError
from ..store import ConfigMap
from ..value import CfgValue, ValueKind

logger = logging.getLogger(__name__)


class DocumentConverter:
    """Convert a parsed document into a ConfigMap.

    Example:
        >>> DocumentConverter().convert({'a': [1, 2]}).get('a/1')
        Int(2)
    """

    format_name = 'document'

    def convert(self, document: Any, default_path: str = '') -> ConfigMap:
        """Convert a parsed document.

        Args:
            document: The parsed top-level object.
            default_path: Assigned to the resulting map.

        Returns:
            The converted ConfigMap.

        Raises:
            InvalidRootError: If the document is not a mapping.
            TypeError: If a key or value has no ConfigMap counterpart.
        """
        if not isinstance(document, Mapping):
            raise InvalidRootError(
                f"{self.format_name} root must be a mapping, "
                f"not {type(document).__name__}"
            )
        cfgmap = self.convert_mapping(document)
        cfgmap.default_path = default_path
        logger.debug(
            "Converted %s document with %d top-level entries",
            self.format_name, len(cfgmap),
        )
        return cfgmap

    def convert_mapping(self, mapping: Mapping[Any, Any]) -> ConfigMap:
        cfgmap = ConfigMap()
        for key, value in mapping.items():
            cfgmap.entries[self.convert_key(key)] = self.convert_value(value)
        return cfgmap

    def convert_key(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        raise TypeError(
            f"{self.format_name} keys must be strings, not {type(key).__name__}"
        )

    def convert_value(self, value: Any) -> CfgValue:
        if value is None:
            return self.convert_null()
        if isinstance(value, (bool, int, float, str)):
            return CfgValue.of(value)
        if isinstance(value, (list, tuple)):
            return CfgValue(
                ValueKind.LIST, [self.convert_value(item) for item in value]
            )
        if isinstance(value, Mapping):
            return CfgValue(ValueKind.MAP, self.convert_mapping(value))
        return self.convert_other(value)

    def convert_null(self) -> CfgValue:
        return CfgValue.null()

    def convert_other(self, value: Any) -> CfgValue:
        raise TypeError(
            f"Unsupported {self.format_name} value: {type(value).__name__}"
        )
