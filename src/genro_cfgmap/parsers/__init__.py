# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Adapters populating a ConfigMap from parsed JSON, TOML and YAML documents.

Available adapters:
- json: ``json_to_cfg`` for ``json.load`` output
- toml: ``toml_to_cfg`` for ``tomllib.load`` output
- yaml: ``yaml_to_cfg`` for ``yaml.safe_load`` output

Each comes with ``load_<format>(text)`` and ``load_<format>_file(path)``.

Example:
    >>> from genro_cfgmap.parsers import load_toml_file
    >>> cfg = load_toml_file('pyproject.toml')
    >>> cfg.get('project/name')
"""

from .base import DocumentConverter
from .from_json import JsonConverter, json_to_cfg, load_json, load_json_file
from .from_toml import TomlConverter, load_toml, load_toml_file, toml_to_cfg
from .from_yaml import YamlConverter, load_yaml, load_yaml_file, yaml_to_cfg

__all__ = [
    'DocumentConverter',
    'JsonConverter',
    'TomlConverter',
    'YamlConverter',
    'json_to_cfg',
    'load_json',
    'load_json_file',
    'toml_to_cfg',
    'load_toml',
    'load_toml_file',
    'yaml_to_cfg',
    'load_yaml',
    'load_yaml_file',
]
