"""Hashing canônico de data blocks.

O fingerprint de um bloco serve para:
- chave de memoização do chamador (o engine não mantém cache)
- detecção de mudança entre dois snapshots do mesmo documento

Decisão: o hash é calculado a partir de JSON canônico (sort_keys, separators).
Valores de data vindos do YAML são serializados pela forma ISO.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date, datetime
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from atlas_datablock.schema.model import AtlasDataBlock


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def compute_payload_hash(payload: Dict[str, Any]) -> str:
    """Computa SHA-256 de um dicionário em formato canônico."""
    canonical = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_default,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def compute_block_hash(block: "AtlasDataBlock") -> str:
    """Computa SHA-256 de um AtlasDataBlock a partir de `to_dict()`."""
    return compute_payload_hash(block.to_dict())
