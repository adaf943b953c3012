# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigMap package - path-addressed configuration container.

The package is organized into:
- core: ConfigMap with path traversal, mutation and default-option lookup

Example:
    >>> from genro_cfgmap import ConfigMap
    >>> cfg = ConfigMap({'config': {'name': 'MyApp'}})
    >>> cfg.get('config/name')
    Str('MyApp')
"""

from .core import SEPARATOR, ConfigMap

__all__ = ["ConfigMap", "SEPARATOR"]
