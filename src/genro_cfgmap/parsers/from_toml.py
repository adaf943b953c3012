# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TOML adapter.

TOML has no null. Offset and local date-times, dates and times become
DATETIME values; arrays of tables become lists of maps.

Example:
    >>> cfg = load_toml('[[person]]\\nname = "a"\\n')
    >>> cfg.get('person/0/name')
    Str('a')
"""

from __future__ import annotations

import datetime
import tomllib
from pathlib import Path
from typing import Any

from ..store import ConfigMap
from ..value import CfgValue
from .base import DocumentConverter


class TomlConverter(DocumentConverter):
    format_name = 'TOML'

    def convert_other(self, value: Any) -> CfgValue:
        if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
            return CfgValue.from_datetime(value)
        return super().convert_other(value)


def toml_to_cfg(document: Any, default_path: str = '') -> ConfigMap:
    """Convert a document returned by ``tomllib.load``/``tomllib.loads``."""
    return TomlConverter().convert(document, default_path=default_path)


def load_toml(text: str, default_path: str = '') -> ConfigMap:
    """Parse TOML text into a ConfigMap."""
    return toml_to_cfg(tomllib.loads(text), default_path=default_path)


def load_toml_file(path: str | Path, default_path: str = '') -> ConfigMap:
    """Parse a TOML file into a ConfigMap."""
    with Path(path).open('rb') as f:
        return toml_to_cfg(tomllib.load(f), default_path=default_path)
