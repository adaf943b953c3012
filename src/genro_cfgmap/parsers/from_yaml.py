# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""YAML adapter.

Documents are loaded with ``yaml.safe_load``. On top of the JSON mapping:

    - timestamps and dates become DATETIME
    - non-string scalar keys (ints, floats, bools) are stringified
    - values with no ConfigMap counterpart (binary, sets) become BAD_VALUE
    - integers outside the 64-bit range become FLOAT
    - an empty document is an empty map

PyYAML resolves anchors and aliases while loading, so aliased nodes arrive
as copies of their anchor and ALIAS is never produced here.
"""

from __future__ import annotations

import datetime
import logging
import math
from pathlib import Path
from typing import Any

import yaml

from ..store import ConfigMap
from ..value import INT_MAX, INT_MIN, CfgValue
from .base import DocumentConverter

logger = logging.getLogger(__name__)


class YamlConverter(DocumentConverter):
    format_name = 'YAML'

    def convert_key(self, key: Any) -> str:
        if isinstance(key, (bool, int, float)):
            return str(key)
        return super().convert_key(key)

    def convert_value(self, value: Any) -> CfgValue:
        if (
            isinstance(value, int)
            and not isinstance(value, bool)
            and not INT_MIN <= value <= INT_MAX
        ):
            try:
                return CfgValue.of(float(value))
            except OverflowError:
                return CfgValue.of(math.copysign(math.inf, value))
        return super().convert_value(value)

    def convert_other(self, value: Any) -> CfgValue:
        if isinstance(value, (datetime.datetime, datetime.date)):
            return CfgValue.from_datetime(value)
        logger.debug("Unrepresentable YAML value of type %s", type(value).__name__)
        return CfgValue.bad_value()


def yaml_to_cfg(document: Any, default_path: str = '') -> ConfigMap:
    """Convert a document returned by ``yaml.safe_load``."""
    return YamlConverter().convert(document, default_path=default_path)


def load_yaml(text: str, default_path: str = '') -> ConfigMap:
    """Parse YAML text into a ConfigMap."""
    document = yaml.safe_load(text)
    if document is None:
        document = {}
    return yaml_to_cfg(document, default_path=default_path)


def load_yaml_file(path: str | Path, default_path: str = '') -> ConfigMap:
    """Parse a YAML file into a ConfigMap."""
    with Path(path).open('r', encoding='utf-8') as f:
        return load_yaml(f.read(), default_path=default_path)
