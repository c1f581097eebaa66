"""
View canônica: timeline (vertical, horizontal e gantt).

Papéis de campo:
    Por padrão os papéis são inferidos do schema, na ordem de declaração:
    - title: primeiro campo `text` cuja chave não é `assignee`
    - description: primeiro campo `textarea`
    - team: primeiro campo `tags`
    - progress: campo com chave literal `progress`
    `field_roles` (papel → chave) sobrepõe a inferência papel a papel.

Ordenação:
    Crescente pela data resolvida; empates preservam a ordem de `data`.
"""

from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from atlas_datablock.core.config.settings import EngineConfig, resolve_config
from atlas_datablock.core.context import EngineContext, report
from atlas_datablock.core.diagnostics import item_date_unparseable
from atlas_datablock.schema.model import AtlasDataBlock, FieldType, SelectOption
from atlas_datablock.values.dates import parse_local_datetime
from atlas_datablock.values.resolver import split_tags

STAGE = "timeline"

ROLE_TITLE = "title"
ROLE_DESCRIPTION = "description"
ROLE_TEAM = "team"
ROLE_PROGRESS = "progress"
ROLES = (ROLE_TITLE, ROLE_DESCRIPTION, ROLE_TEAM, ROLE_PROGRESS)


@dataclass(frozen=True)
class TimelineEvent:
    id: str
    title: str
    date: datetime
    end_date: Optional[datetime] = None
    description: Optional[str] = None
    team: Optional[List[str]] = None
    progress: Optional[float] = None
    type: Optional[str] = None
    type_option: Optional[SelectOption] = None

    @property
    def is_completed(self) -> bool:
        return self.progress == 100

    @property
    def is_in_progress(self) -> bool:
        return self.progress is not None and 0 < self.progress < 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "description": self.description,
            "team": list(self.team) if self.team is not None else None,
            "progress": self.progress,
            "type": self.type,
            "type_option": self.type_option.to_dict() if self.type_option else None,
        }


@dataclass(frozen=True)
class TimelineRange:
    """Janela do gantt: um mês de folga antes e depois dos eventos."""

    start: datetime
    end: datetime
    total_days: float
    months: List[datetime]


@dataclass(frozen=True)
class TimelineStats:
    total: int
    completed: int
    in_progress: int
    future: int


def infer_field_roles(block: AtlasDataBlock) -> Dict[str, Optional[str]]:
    """Papéis inferidos do schema (primeiro campo que satisfaz cada regra)."""
    roles: Dict[str, Optional[str]] = {role: None for role in ROLES}
    for f in block.schema:
        if roles[ROLE_TITLE] is None and f.type == FieldType.TEXT.value and f.key != "assignee":
            roles[ROLE_TITLE] = f.key
        if roles[ROLE_DESCRIPTION] is None and f.type == FieldType.TEXTAREA.value:
            roles[ROLE_DESCRIPTION] = f.key
        if roles[ROLE_TEAM] is None and f.type == FieldType.TAGS.value:
            roles[ROLE_TEAM] = f.key
        if roles[ROLE_PROGRESS] is None and f.key == "progress":
            roles[ROLE_PROGRESS] = f.key
    return roles


def _progress(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    try:
        return float(str(raw).strip().rstrip("%"))
    except ValueError:
        return None


def parse_timeline(
    block: AtlasDataBlock,
    date_field: Optional[str] = None,
    end_date_field: Optional[str] = None,
    *,
    field_roles: Optional[Mapping[str, str]] = None,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> List[TimelineEvent]:
    cfg = resolve_config(config)
    date_key = date_field or block.date_field or cfg.timeline_date_field
    end_key = end_date_field or block.end_date_field

    roles = infer_field_roles(block)
    for role, key in (field_roles or {}).items():
        if role in roles:
            roles[role] = key
    type_field = block.get_field("type")

    events: List[TimelineEvent] = []
    dropped: List[str] = []
    for item in block.data:
        moment = parse_local_datetime(item.get(date_key))
        if moment is None:
            dropped.append(item["id"])
            continue

        title = item.get(roles[ROLE_TITLE]) if roles[ROLE_TITLE] else None
        description = item.get(roles[ROLE_DESCRIPTION]) if roles[ROLE_DESCRIPTION] else None
        team = item.get(roles[ROLE_TEAM]) if roles[ROLE_TEAM] else None
        kind = item.get("type")

        events.append(
            TimelineEvent(
                id=item["id"],
                title=str(title) if title not in (None, "") else cfg.untitled,
                date=moment,
                end_date=parse_local_datetime(item.get(end_key)) if end_key else None,
                description=str(description) if description not in (None, "") else None,
                team=split_tags(team) if team not in (None, "") else None,
                progress=_progress(item.get(roles[ROLE_PROGRESS])) if roles[ROLE_PROGRESS] else None,
                type=str(kind) if kind not in (None, "") else None,
                type_option=type_field.find_option(kind) if type_field is not None else None,
            )
        )

    if dropped:
        report(
            ctx,
            stage=STAGE,
            payload=item_date_unparseable(block_id=block.id, item_ids=dropped, field=date_key, view=STAGE),
        )
    return sorted(events, key=lambda e: e.date)


def _shift_month(year: int, month: int, delta: int) -> tuple:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def months_between(start: datetime, end: datetime) -> List[datetime]:
    """Primeiro dia de cada mês de `start` até `end`, inclusive."""
    months = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        months.append(datetime(year, month, 1))
        year, month = _shift_month(year, month, 1)
    return months


def timeline_range(events: Sequence[TimelineEvent]) -> Optional[TimelineRange]:
    """Janela do gantt; None quando não há eventos."""
    if not events:
        return None

    earliest = min(e.date for e in events)
    latest = max((e.end_date or e.date) for e in events)

    start_year, start_month = _shift_month(earliest.year, earliest.month, -1)
    end_year, end_month = _shift_month(latest.year, latest.month, 1)
    start = datetime(start_year, start_month, 1)
    end = datetime(end_year, end_month, _calendar.monthrange(end_year, end_month)[1])

    return TimelineRange(
        start=start,
        end=end,
        total_days=(end - start).total_seconds() / 86400,
        months=months_between(start, end),
    )


def timeline_rows(
    events: Sequence[TimelineEvent],
    per_row: Optional[int] = None,
    *,
    config: Optional[EngineConfig] = None,
) -> List[List[TimelineEvent]]:
    """Linhas da timeline horizontal; padrão de `views.timeline.per_row`."""
    if per_row is None:
        per_row = resolve_config(config).timeline_per_row
    if per_row < 1:
        raise ValueError("per_row must be >= 1")
    return [list(events[i:i + per_row]) for i in range(0, len(events), per_row)]


def timeline_stats(events: Sequence[TimelineEvent], *, now: datetime) -> TimelineStats:
    return TimelineStats(
        total=len(events),
        completed=sum(1 for e in events if e.is_completed),
        in_progress=sum(1 for e in events if e.is_in_progress),
        future=sum(1 for e in events if e.date > now),
    )
