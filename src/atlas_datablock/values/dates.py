"""
Política canônica de parsing de datas em horário local.

Strings sem `Z` e sem offset `±HH:MM` são interpretadas como horário de
parede local: ano/mês/dia/hora/minuto/segundo são lidos individualmente e a
data é reconstruída como `datetime` ingênuo (naive). Isso evita o erro de
um dia para entradas somente-data quando o fuso do leitor difere de UTC.

Strings com offset explícito são convertidas para o horário local e
retornadas também como `datetime` ingênuo, para que todas as comparações do
engine ocorram no mesmo referencial.

O YAML (`safe_load`) já converte timestamps não-quotados em `date`/`datetime`;
ambos são aceitos.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional


_OFFSET_RE = re.compile(r"([+-])(\d{2}):?(\d{2})$")
# offset só conta depois de um horário (separador `T` ou espaço)
_TIME_OFFSET_RE = re.compile(r"\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?\s*(?:Z|[+-]\d{2}:?\d{2})$")
_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _int_or_zero(text: str) -> int:
    digits = re.match(r"\d+", text.strip())
    return int(digits.group(0)) if digits else 0


def _parse_wall_clock(text: str) -> Optional[datetime]:
    date_part, _, time_part = text.partition("T")
    if not time_part and " " in date_part.strip():
        date_part, _, time_part = date_part.strip().partition(" ")

    m = _DATE_RE.match(date_part.strip())
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups())

    hour = minute = second = 0
    if time_part:
        pieces = time_part.split(":")
        hour = _int_or_zero(pieces[0])
        minute = _int_or_zero(pieces[1]) if len(pieces) > 1 else 0
        # segundos fracionários são descartados
        second = _int_or_zero(pieces[2].split(".")[0]) if len(pieces) > 2 else 0

    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def _parse_with_offset(text: str) -> Optional[datetime]:
    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    m = _OFFSET_RE.search(normalized)
    if m:
        # `09:00:00 +0800` -> `09:00:00+08:00`
        normalized = f"{normalized[:m.start()].rstrip()}{m.group(1)}{m.group(2)}:{m.group(3)}"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return _to_local_naive(parsed)


def has_explicit_offset(text: str) -> bool:
    stripped = text.strip()
    return stripped.endswith("Z") or bool(_TIME_OFFSET_RE.search(stripped))


def parse_local_datetime(value: Any) -> Optional[datetime]:
    """
    Converte um valor bruto em `datetime` local ingênuo.

    Retorna None para valores vazios, tipos não suportados ou datas inválidas.
    Nunca levanta exceção.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if has_explicit_offset(text):
        return _parse_with_offset(text)
    return _parse_wall_clock(text)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def sunday_index(value: date) -> int:
    """Dia da semana com domingo = 0 (convenção das views de calendário)."""
    return (value.weekday() + 1) % 7
