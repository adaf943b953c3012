# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-CfgMap - Path-addressed configuration trees with a condition algebra.

A small library providing a schema-less configuration store for the Genro
ecosystem: typed values addressable by slash-delimited paths, default-option
fallback, and composable conditions to validate any node.
"""

import logging

__version__ = "0.1.0"

from .conditions import (
    FALSE,
    TRUE,
    And,
    Condition,
    IsBool,
    IsDatetime,
    IsExactly,
    IsExactlyFloat,
    IsExactlyInt,
    IsExactlyList,
    IsExactlyMap,
    IsExactlyStr,
    IsFloat,
    IsInt,
    IsKind,
    IsList,
    IsListWith,
    IsListWithLength,
    IsMap,
    IsNull,
    IsStr,
    IsTrue,
    Not,
    Or,
    check_that,
)
from .exceptions import CfgMapError, InvalidRootError, NotAMapError
from .store import ConfigMap
from .value import CfgValue, ValueKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "ConfigMap",
    "CfgValue",
    "ValueKind",
    # Conditions
    "Condition",
    "check_that",
    "TRUE",
    "FALSE",
    "IsKind",
    "IsInt",
    "IsFloat",
    "IsStr",
    "IsBool",
    "IsMap",
    "IsList",
    "IsNull",
    "IsDatetime",
    "IsExactly",
    "IsExactlyInt",
    "IsExactlyFloat",
    "IsExactlyStr",
    "IsExactlyList",
    "IsExactlyMap",
    "IsTrue",
    "IsListWith",
    "IsListWithLength",
    "And",
    "Or",
    "Not",
    # Exceptions
    "CfgMapError",
    "NotAMapError",
    "InvalidRootError",
]
