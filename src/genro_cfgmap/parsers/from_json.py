# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON adapter.

Mapping:
    - null: NULL
    - true/false: BOOL
    - integral numbers: INT, other numbers: FLOAT
    - strings: STR, arrays: LIST, objects: MAP

Example:
    >>> cfg = load_json('{"sub": {"integer": 20}}')
    >>> cfg.get('sub/integer')
    Int(20)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..store import ConfigMap
from .base import DocumentConverter


class JsonConverter(DocumentConverter):
    format_name = 'JSON'


def json_to_cfg(document: Any, default_path: str = '') -> ConfigMap:
    """Convert a document returned by ``json.load``/``json.loads``."""
    return JsonConverter().convert(document, default_path=default_path)


def load_json(text: str, default_path: str = '') -> ConfigMap:
    """Parse JSON text into a ConfigMap."""
    return json_to_cfg(json.loads(text), default_path=default_path)


def load_json_file(path: str | Path, default_path: str = '') -> ConfigMap:
    """Parse a JSON file into a ConfigMap."""
    with Path(path).open('r', encoding='utf-8') as f:
        return json_to_cfg(json.load(f), default_path=default_path)
