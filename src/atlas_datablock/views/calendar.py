"""
View canônica: calendário (mês, semana e heatmap anual).

Responsabilidades:
- Converter registros de um bloco em `CalendarEvent` (horário local)
- Gerar a grade mensal (semanas iniciando no domingo) e a semana de uma data
- Atribuir eventos a cada dia que o intervalo do evento cobre
- Agregar eventos por dia em um heatmap anual com níveis 0–4

Decisões arquiteturais:
- Meses são 1-based (`month_grid(2025, 2)` é fevereiro)
- Nenhuma função consulta o relógio: `today` é sempre explícito;
  sem `today`, nenhum dia é marcado como hoje
- Grades são imutáveis; `assign_to_grid` devolve novas semanas

Limites explícitos:
- Não resolve fusos além da política de horário local de `values.dates`
- Não faz layout de eventos sobrepostos dentro de um dia
"""

from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from atlas_datablock.core.config.settings import EngineConfig, resolve_config
from atlas_datablock.core.context import EngineContext, report
from atlas_datablock.core.diagnostics import item_date_unparseable
from atlas_datablock.schema.model import AtlasDataBlock, SelectOption
from atlas_datablock.values.dates import (
    add_days,
    end_of_day,
    parse_local_datetime,
    start_of_day,
    sunday_index,
)

STAGE = "calendar"

MAX_MONTH_WEEKS = 6
MAX_YEAR_WEEKS = 53


# ---------------------------------------------------------------------------
# Tipos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CalendarEvent:
    """Evento derivado de um registro; `start`/`end` em horário local ingênuo."""

    id: str
    title: str
    start: datetime
    end: Optional[datetime] = None
    type: Optional[str] = None
    type_option: Optional[SelectOption] = None
    attendees: Optional[List[str]] = None
    location: Optional[str] = None
    description: Optional[str] = None
    all_day: bool = False
    value: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
            "type": self.type,
            "type_option": self.type_option.to_dict() if self.type_option else None,
            "attendees": list(self.attendees) if self.attendees is not None else None,
            "location": self.location,
            "description": self.description,
            "all_day": self.all_day,
            "value": self.value,
        }


@dataclass(frozen=True)
class CalendarDay:
    date: datetime
    is_current_month: bool
    is_today: bool
    is_weekend: bool
    events: List[CalendarEvent] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarWeek:
    week_number: int
    days: List[CalendarDay]


@dataclass(frozen=True)
class HeatmapDay:
    date: datetime
    value: float
    level: int
    in_year: bool


@dataclass(frozen=True)
class HeatmapStats:
    total_value: float
    active_days: int
    current_streak: int
    max_streak: int
    max_value: float


# ---------------------------------------------------------------------------
# Eventos
# ---------------------------------------------------------------------------

def _attendees(raw: Any) -> Optional[List[str]]:
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        return [str(a) for a in raw]
    return [str(raw)]


def _numeric(raw: Any) -> Optional[float]:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return raw


def _opt_text(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    return str(raw)


def parse_events(
    block: AtlasDataBlock,
    date_field: Optional[str] = None,
    end_date_field: Optional[str] = None,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> List[CalendarEvent]:
    """
    Converte os registros do bloco em eventos ordenados por início.

    Registros sem data inicial interpretável são descartados (e reportados
    no contexto, quando houver). Uma data final inválida vira `None`.
    """
    cfg = resolve_config(config)
    start_key = date_field or block.date_field or cfg.calendar_date_field
    end_key = end_date_field or block.end_date_field
    type_field = block.get_field("type")

    events: List[CalendarEvent] = []
    dropped: List[str] = []
    for item in block.data:
        start = parse_local_datetime(item.get(start_key))
        if start is None:
            dropped.append(item["id"])
            continue
        end = parse_local_datetime(item.get(end_key)) if end_key else None
        kind = item.get("type")

        events.append(
            CalendarEvent(
                id=item["id"],
                title=str(item.get("title") or item.get("name") or cfg.untitled),
                start=start,
                end=end,
                type=_opt_text(kind),
                type_option=type_field.find_option(kind) if type_field is not None else None,
                attendees=_attendees(item.get("attendees")),
                location=_opt_text(item.get("location")),
                description=_opt_text(item.get("description")),
                all_day=bool(item.get("all_day", item.get("allDay", False))),
                value=_numeric(item.get("value")),
            )
        )

    if dropped:
        report(
            ctx,
            stage=STAGE,
            payload=item_date_unparseable(block_id=block.id, item_ids=dropped, field=start_key, view=STAGE),
        )
    # sorted() é estável: empates preservam a ordem de origem
    return sorted(events, key=lambda e: e.start)


# ---------------------------------------------------------------------------
# Grades
# ---------------------------------------------------------------------------

def _make_day(moment: datetime, month: Optional[int], today: Optional[datetime]) -> CalendarDay:
    weekday = sunday_index(moment)
    return CalendarDay(
        date=moment,
        is_current_month=month is None or moment.month == month,
        is_today=today is not None and moment == start_of_day(today),
        is_weekend=weekday in (0, 6),
        events=[],
    )


def month_grid(year: int, month: int, *, today: Optional[datetime] = None) -> List[CalendarWeek]:
    """
    Semanas (domingo → sábado) que cobrem o mês, incluindo dias vizinhos.

    A geração para assim que uma semana completa termina depois do último
    dia do mês; nunca passa de 6 semanas.
    """
    first = datetime(year, month, 1)
    last = datetime(year, month, _calendar.monthrange(year, month)[1])
    current = add_days(first, -sunday_index(first))

    weeks: List[CalendarWeek] = []
    for number in range(1, MAX_MONTH_WEEKS + 1):
        days = []
        for _ in range(7):
            days.append(_make_day(current, month, today))
            current = add_days(current, 1)
        weeks.append(CalendarWeek(week_number=number, days=days))
        if current > last:
            break
    return weeks


def week_days(anchor: datetime) -> List[datetime]:
    """Os 7 dias (meia-noite) da semana de domingo que contém `anchor`."""
    start = start_of_day(anchor) - timedelta(days=sunday_index(anchor))
    return [add_days(start, i) for i in range(7)]


def _occurs_on(event: CalendarEvent, day: datetime) -> bool:
    first = start_of_day(event.start)
    last = end_of_day(event.end if event.end is not None else event.start)
    return first <= end_of_day(day) and last >= start_of_day(day)


def assign_to_grid(weeks: Sequence[CalendarWeek], events: Sequence[CalendarEvent]) -> List[CalendarWeek]:
    """Novas semanas com cada dia listando os eventos que o cobrem."""
    return [
        replace(
            week,
            days=[replace(day, events=[e for e in events if _occurs_on(e, day.date)]) for day in week.days],
        )
        for week in weeks
    ]


def week_grid(
    anchor: datetime,
    events: Sequence[CalendarEvent],
    *,
    today: Optional[datetime] = None,
) -> CalendarWeek:
    """Semana de `anchor` com eventos atribuídos (view semanal)."""
    days = [_make_day(d, None, today) for d in week_days(anchor)]
    week = CalendarWeek(week_number=1, days=days)
    return assign_to_grid([week], events)[0]


# ---------------------------------------------------------------------------
# Heatmap anual
# ---------------------------------------------------------------------------

def year_weeks(year: int) -> List[List[datetime]]:
    """Semanas iniciando no domingo anterior (ou igual) a 1º de janeiro."""
    first = datetime(year, 1, 1)
    current = add_days(first, -sunday_index(first))

    weeks: List[List[datetime]] = []
    for _ in range(MAX_YEAR_WEEKS):
        week = []
        for _ in range(7):
            week.append(current)
            current = add_days(current, 1)
        weeks.append(week)
        if current.year > year:
            break
    return weeks


def heat_values(events: Sequence[CalendarEvent], year: int) -> Dict[datetime, float]:
    """Soma de `value` (ou 1) por dia de início, para eventos do ano."""
    values: Dict[datetime, float] = {}
    for event in events:
        if event.start.year != year:
            continue
        day = start_of_day(event.start)
        # valor ausente ou zero conta como uma ocorrência
        values[day] = values.get(day, 0) + (event.value or 1)
    return values


def heat_level(value: float, max_value: float) -> int:
    if value <= 0 or max_value <= 0:
        return 0
    ratio = value / max_value
    if ratio <= 0.25:
        return 1
    if ratio <= 0.5:
        return 2
    if ratio <= 0.75:
        return 3
    return 4


def heatmap(
    events: Sequence[CalendarEvent],
    year: int,
    *,
    today: Optional[datetime] = None,
) -> Tuple[List[List[HeatmapDay]], HeatmapStats]:
    """
    Grade do heatmap e estatísticas do ano.

    - total/dias ativos/maior sequência consideram apenas dias do ano até
      `today` (todos os dias do ano, se `today` for None)
    - sequência atual: dias ativos consecutivos terminando em `today`
      (0 sem `today`)
    """
    values = heat_values(events, year)
    max_value = max(values.values(), default=0)
    scale = max(max_value, 1)
    cutoff = start_of_day(today) if today is not None else None

    grid: List[List[HeatmapDay]] = []
    total = 0.0
    active = 0
    streak = 0
    max_streak = 0
    for week in year_weeks(year):
        row = []
        for day in week:
            value = values.get(day, 0)
            row.append(HeatmapDay(date=day, value=value, level=heat_level(value, scale), in_year=day.year == year))
            if day.year != year or (cutoff is not None and day > cutoff):
                continue
            total += value
            if value > 0:
                active += 1
                streak += 1
                max_streak = max(max_streak, streak)
            else:
                streak = 0
        grid.append(row)

    current = 0
    if cutoff is not None:
        check = cutoff
        while values.get(check, 0) > 0:
            current += 1
            check = add_days(check, -1)

    stats = HeatmapStats(
        total_value=total,
        active_days=active,
        current_streak=current,
        max_streak=max_streak,
        max_value=max_value,
    )
    return grid, stats
