# src/atlas_datablock/core/config/defaults.py
"""
Configuração padrão (defaults) embutida do Atlas DataBlock.

Esta é a base sobre a qual arquivos locais (YAML/JSON) são aplicados via
deep-merge. Os valores refletem o comportamento observado no front end
original: fence `atlas-data`, locale `zh-CN`, campos padrão por view.
"""

from copy import deepcopy
from typing import Any, Dict


DEFAULT_CONFIG: Dict[str, Any] = {
    "parser": {
        "fence_tag": "atlas-data",
    },
    "display": {
        "locale": "zh-CN",
        "empty_token": "—",
        "object_marker": "__object__",
        # None -> token do locale
        "untitled_token": None,
        "uncategorized_token": None,
        # None -> moeda padrão do locale
        "currency": None,
    },
    "views": {
        "kanban": {"group_field": "status", "swimlane_field": "priority"},
        "calendar": {"date_field": "start_date"},
        "timeline": {"date_field": "date", "per_row": 4},
        "gallery": {"cover_field": "cover"},
    },
}


def default_config() -> Dict[str, Any]:
    """Retorna uma cópia independente dos defaults embutidos."""
    return deepcopy(DEFAULT_CONFIG)
