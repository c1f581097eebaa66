"""
View canônica: list (passthrough + ordenação + agrupamento).

Responsabilidades:
- Devolver os registros do bloco, opcionalmente ordenados por `sort_by`.
- Agrupar opcionalmente pelo valor BRUTO de `group_by` (não o valor resolvido).
- Projetar o bloco como tabela (`pandas.DataFrame`) para a view de tabela.

Princípios:
- Ordenação estável: sem `sort_by`, a ordem de origem é preservada.
- Valores ausentes ficam sempre no fim, em qualquer direção.
- Itens sem o campo de agrupamento vão para um `ListGroup` explícito
  (`ungrouped=True`), posicionado por último; nunca são descartados.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Dict, List, Optional, Sequence, Tuple

from atlas_datablock.core.config.settings import EngineConfig
from atlas_datablock.schema.labels import field_label
from atlas_datablock.schema.model import AtlasDataBlock, FieldSchema, FieldType
from atlas_datablock.values.resolver import resolve_display_value

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class ListGroup:
    """Balde de agrupamento: valor bruto compartilhado pelos itens."""

    value: Any
    items: List[Dict[str, Any]] = field(default_factory=list)
    ungrouped: bool = False

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class ListView:
    """Resultado da view de lista."""

    block_id: str
    items: List[Dict[str, Any]]
    sort_by: Optional[str] = None
    sort_order: str = SORT_ASC
    group_by: Optional[str] = None
    groups: Optional[List[ListGroup]] = field(default=None)

    @property
    def total(self) -> int:
        return len(self.items)


def _is_missing(v: Any) -> bool:
    return v is None or v == ""


def _compare(a: Any, b: Any) -> int:
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    numeric = (int, float)
    if isinstance(a, numeric) and isinstance(b, numeric) and not isinstance(a, bool) and not isinstance(b, bool):
        return (a > b) - (a < b)
    sa, sb = str(a), str(b)
    return (sa > sb) - (sa < sb)


def sort_items(
    items: Sequence[Dict[str, Any]],
    key: Optional[str],
    order: Optional[str] = SORT_ASC,
) -> List[Dict[str, Any]]:
    """Ordenação estável por um campo; ausentes sempre no fim."""
    if not key:
        return list(items)
    descending = str(order or SORT_ASC).lower() == SORT_DESC

    def cmp(x: Dict[str, Any], y: Dict[str, Any]) -> int:
        a, b = x.get(key), y.get(key)
        if _is_missing(a) and _is_missing(b):
            return 0
        if _is_missing(a):
            return 1
        if _is_missing(b):
            return -1
        result = _compare(a, b)
        return -result if descending else result

    return sorted(items, key=cmp_to_key(cmp))


def _bucket_key(value: Any) -> Tuple[str, Any]:
    # True, 1 e 1.0 têm o mesmo hash; o tipo mantém os baldes separados
    if isinstance(value, (str, int, float, bool)):
        return (type(value).__name__, value)
    return (type(value).__name__, repr(value))


def group_items(
    items: Sequence[Dict[str, Any]],
    key: str,
) -> List[ListGroup]:
    """Agrupa por valor bruto, na ordem de primeira aparição; o grupo sem valor vem por último."""
    buckets: Dict[Tuple[str, Any], ListGroup] = {}
    ungrouped = ListGroup(value=None, items=[], ungrouped=True)
    for item in items:
        value = item.get(key)
        if _is_missing(value):
            ungrouped.items.append(item)
            continue
        bucket = _bucket_key(value)
        if bucket not in buckets:
            buckets[bucket] = ListGroup(value=value, items=[])
        buckets[bucket].items.append(item)
    groups = list(buckets.values())
    if ungrouped.items:
        groups.append(ungrouped)
    return groups


def list_view(
    block: AtlasDataBlock,
    *,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    group_by: Optional[str] = None,
) -> ListView:
    """Monta a view de lista. Argumentos omitidos herdam os hints do bloco."""
    sort_key = sort_by if sort_by is not None else block.sort_by
    order = (sort_order or block.sort_order or SORT_ASC).lower()
    group_key = group_by if group_by is not None else block.group_by

    items = sort_items(deepcopy(block.data), sort_key, order)
    groups = group_items(items, group_key) if group_key else None

    return ListView(
        block_id=block.id,
        items=items,
        sort_by=sort_key,
        sort_order=order,
        group_by=group_key,
        groups=groups,
    )


def visible_fields(block: AtlasDataBlock) -> List[FieldSchema]:
    """Colunas da tabela: textareas ficam ocultas, exceto `description`."""
    return [
        f for f in block.schema
        if f.type != FieldType.TEXTAREA.value or f.key == "description"
    ]


def to_dataframe(
    block: AtlasDataBlock,
    *,
    display: bool = True,
    config: Optional[EngineConfig] = None,
):
    """
    Projeta o bloco como `pandas.DataFrame` (uma coluna por campo visível).

    - display=True: células com o valor de exibição resolvido, cabeçalho = rótulo
    - display=False: células com o valor bruto, cabeçalho = chave do campo
    O índice do DataFrame é o `id` dos registros.
    """
    import pandas as pd  # type: ignore

    fields = visible_fields(block)
    rows: List[Dict[str, Any]] = []
    for item in block.data:
        row: Dict[str, Any] = {}
        for f in fields:
            raw = item.get(f.key)
            if display:
                row[field_label(f)] = resolve_display_value(f, raw, config=config).display_value
            else:
                row[f.key] = deepcopy(raw)
        rows.append(row)

    columns = [field_label(f) if display else f.key for f in fields]
    index = pd.Index([item["id"] for item in block.data], name="id")
    return pd.DataFrame(rows, columns=columns, index=index)
