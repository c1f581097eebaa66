"""
View canônica: kanban (1-D por colunas e 2-D por swimlanes).

Responsabilidades:
- 1-D: uma coluna por opção do campo de agrupamento, na ordem declarada,
  mesmo que vazia; cada item vai para a coluna cujo id é igual ao seu valor bruto.
- 2-D: produto cartesiano completo swimlane × coluna; células vazias estão
  estruturalmente presentes.

Princípios:
- Pré-condição não atendida (campo sem `options`) → lista vazia, nunca exceção.
- Itens sem coluna correspondente são descartados (sem coluna "catch-all");
  o descarte é reportado no `EngineContext`, quando fornecido. Valores
  compostos (listas, mappings) nunca correspondem a uma coluna.
- Itens são copiados; a saída não referencia o bloco.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from atlas_datablock.core.config.settings import EngineConfig, resolve_config
from atlas_datablock.core.context import EngineContext, report
from atlas_datablock.core.diagnostics import field_options_missing, item_group_unmatched
from atlas_datablock.schema.model import AtlasDataBlock, SelectOption, palette_token, value_key

STAGE = "kanban"


@dataclass(frozen=True)
class KanbanColumn:
    id: str
    label: str
    color: str
    icon: Optional[str] = None
    items: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class KanbanSwimlane:
    id: str
    label: str
    color: str
    columns: List[KanbanColumn] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(c.count for c in self.columns)


def _empty_column(option: SelectOption) -> KanbanColumn:
    return KanbanColumn(
        id=option.value,
        label=option.label,
        color=palette_token(option.color),
        icon=option.icon,
        items=[],
    )


def _options_or_report(
    block: AtlasDataBlock,
    key: str,
    ctx: Optional[EngineContext],
) -> List[SelectOption]:
    options = block.options_for(key)
    if not options:
        report(ctx, stage=STAGE, payload=field_options_missing(block_id=block.id, field=key))
    return options


def kanban_columns(
    block: AtlasDataBlock,
    group_field: Optional[str] = None,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> List[KanbanColumn]:
    """Kanban 1-D. Campo padrão: `group_by` do bloco, senão o da configuração."""
    cfg = resolve_config(config)
    key = group_field or block.group_by or cfg.kanban_group_field

    options = _options_or_report(block, key, ctx)
    if not options:
        return []

    columns = [_empty_column(o) for o in options]
    by_id: Dict[str, KanbanColumn] = {}
    for column in columns:
        by_id.setdefault(column.id, column)

    dropped: List[str] = []
    for item in block.data:
        column = by_id.get(value_key(item.get(key)))
        if column is None:
            dropped.append(item["id"])
            continue
        column.items.append(deepcopy(item))

    if dropped:
        report(ctx, stage=STAGE, payload=item_group_unmatched(block_id=block.id, item_ids=dropped, fields=[key]))
    return columns


def kanban_swimlanes(
    block: AtlasDataBlock,
    group_field: Optional[str] = None,
    swimlane_field: Optional[str] = None,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> List[KanbanSwimlane]:
    """Kanban 2-D. Exige `options` nos dois campos; caso contrário, lista vazia."""
    cfg = resolve_config(config)
    column_key = group_field or block.group_by or cfg.kanban_group_field
    lane_key = swimlane_field or block.swimlane_by or cfg.kanban_swimlane_field

    column_options = _options_or_report(block, column_key, ctx)
    lane_options = _options_or_report(block, lane_key, ctx)
    if not column_options or not lane_options:
        return []

    swimlanes: List[KanbanSwimlane] = []
    cells: Dict[tuple, KanbanColumn] = {}
    for lane in lane_options:
        columns = [_empty_column(o) for o in column_options]
        for column in columns:
            cells.setdefault((lane.value, column.id), column)
        swimlanes.append(
            KanbanSwimlane(
                id=lane.value,
                label=lane.label,
                color=palette_token(lane.color),
                columns=columns,
            )
        )

    dropped: List[str] = []
    for item in block.data:
        cell = cells.get((value_key(item.get(lane_key)), value_key(item.get(column_key))))
        if cell is None:
            dropped.append(item["id"])
            continue
        cell.items.append(deepcopy(item))

    if dropped:
        report(
            ctx,
            stage=STAGE,
            payload=item_group_unmatched(block_id=block.id, item_ids=dropped, fields=[lane_key, column_key]),
        )
    return swimlanes
