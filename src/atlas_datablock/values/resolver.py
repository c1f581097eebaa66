"""
DisplayValueResolver canônico (v1).

Dado um `FieldSchema` e um valor bruto, calcula a string de exibição
canônica formatada por locale e, para campos select-like, a `SelectOption`
correspondente (cor/ícone).

Regras:
    - None / string vazia → token de vazio, para qualquer tipo
    - select/status → opção por igualdade de valor; sem opção → str(valor)
    - date/datetime → data longa local (política de horário local)
    - currency → formatação monetária do locale
    - tags → lista, array JSON em string, ou separação por vírgula
    - demais → str(valor)

Garantia de pureza:
    - O mesmo par (schema, valor) sempre produz o mesmo resultado
    - Nenhuma função consulta o relógio; tempo relativo exige `now` explícito
    - O valor bruto nunca é mutado
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from atlas_datablock.core.config.settings import EngineConfig, resolve_config
from atlas_datablock.schema.labels import LabelResolver, field_label
from atlas_datablock.schema.model import AtlasDataBlock, FieldSchema, FieldType, SelectOption
from atlas_datablock.values.dates import parse_local_datetime
from atlas_datablock.values.locales import LocalePreset


@dataclass(frozen=True)
class FieldValue:
    """Valor resolvido de um campo (exibição + opção select)."""

    key: str
    label: str
    type: str
    value: Any
    display_value: str
    option: Optional[SelectOption] = None
    options: Optional[List[SelectOption]] = None

    @property
    def is_empty(self) -> bool:
        return self.value is None or self.value == ""


# ---------------------------------------------------------------------------
# Formatação numérica
# ---------------------------------------------------------------------------

def _group_digits(integer: str, sep: str) -> str:
    head = len(integer) % 3 or 3
    parts = [integer[:head]] + [integer[i:i + 3] for i in range(head, len(integer), 3)]
    return sep.join(parts)


def format_decimal(
    value: Decimal,
    preset: LocalePreset,
    *,
    min_fraction: int = 0,
    max_fraction: int = 3,
    rounding: str = ROUND_HALF_EVEN,
) -> str:
    quantum = Decimal(1).scaleb(-max_fraction)
    rounded = value.quantize(quantum, rounding=rounding)
    sign = "-" if rounded < 0 else ""
    text = f"{abs(rounded):.{max_fraction}f}"
    integer, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    if len(fraction) < min_fraction:
        fraction = fraction.ljust(min_fraction, "0")
    grouped = _group_digits(integer, preset.group_sep)
    return f"{sign}{grouped}{preset.decimal_sep}{fraction}" if fraction else f"{sign}{grouped}"


def _to_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            return None
        return parsed if parsed.is_finite() else None
    return None


def format_number(value: Any, preset: LocalePreset) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    number = _to_decimal(value)
    if number is None:
        return str(value)
    return format_decimal(number, preset)


def format_currency(value: Any, preset: LocalePreset, currency: str) -> str:
    amount = _to_decimal(value)
    if amount is None:
        return str(value)
    # JPY não possui casas decimais
    digits = 0 if currency.upper() == "JPY" else 2
    symbol = preset.currency_symbols.get(currency.upper(), f"{currency.upper()} ")
    body = format_decimal(abs(amount), preset, min_fraction=digits, max_fraction=digits, rounding=ROUND_HALF_UP)
    formatted = preset.currency_pattern.format(symbol=symbol, amount=body).replace("  ", " ")
    return f"-{formatted}" if amount < 0 else formatted


# ---------------------------------------------------------------------------
# Datas
# ---------------------------------------------------------------------------

def format_long_date(value: datetime, preset: LocalePreset) -> str:
    return preset.date_long.format(
        year=value.year,
        month=value.month,
        day=value.day,
        month_name=preset.month_name(value.month),
    )


def format_short_date(value: datetime, preset: LocalePreset) -> str:
    return preset.date_short.format(year=value.year, month=value.month, day=value.day)


def format_relative_time(
    value: Any,
    *,
    now: datetime,
    config: Optional[EngineConfig] = None,
) -> str:
    """
    Tempo relativo ("3 天前", "2 hours ago").

    Além de 30 dias, retorna a data curta. `now` é obrigatório para manter a
    função determinística.
    """
    cfg = resolve_config(config)
    preset = cfg.preset
    if value is None or value == "":
        return cfg.empty_token
    moment = parse_local_datetime(value)
    if moment is None:
        return str(value)

    seconds = int((now - moment).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 30:
        return format_short_date(moment, preset)
    if days > 0:
        return preset.days_ago.format(n=days)
    if hours > 0:
        return preset.hours_ago.format(n=hours)
    if minutes > 0:
        return preset.minutes_ago.format(n=minutes)
    return preset.just_now


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

def split_tags(value: Any) -> List[str]:
    """Normaliza tags: lista, array JSON em string ou texto separado por vírgula."""
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and v != ""]
    text = str(value).strip()
    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            return [str(v) for v in decoded if v is not None and v != ""]
    return [part.strip() for part in text.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# API pública
# ---------------------------------------------------------------------------

def _display(field: FieldSchema, raw: Any, cfg: EngineConfig) -> tuple:
    preset = cfg.preset
    ftype = field.type

    if ftype in (FieldType.SELECT.value, FieldType.STATUS.value):
        option = field.find_option(raw)
        return (option.label if option else str(raw)), option

    if ftype == FieldType.MULTI_SELECT.value:
        values = raw if isinstance(raw, (list, tuple)) else split_tags(raw)
        labels = []
        for v in values:
            option = field.find_option(v)
            labels.append(option.label if option else str(v))
        return ", ".join(labels), None

    if ftype == FieldType.DATE.value:
        moment = parse_local_datetime(raw)
        return (format_long_date(moment, preset) if moment else str(raw)), None

    if ftype == FieldType.DATETIME.value:
        moment = parse_local_datetime(raw)
        if moment is None:
            return str(raw), None
        return f"{format_long_date(moment, preset)} {moment:%H:%M}", None

    if ftype == FieldType.CURRENCY.value:
        return format_currency(raw, preset, field.currency or cfg.currency_code), None

    if ftype == FieldType.NUMBER.value:
        return format_number(raw, preset), None

    if ftype in (FieldType.BOOLEAN.value, FieldType.TOGGLE.value) and isinstance(raw, bool):
        return (preset.yes if raw else preset.no), None

    if ftype == FieldType.TAGS.value:
        return ", ".join(split_tags(raw)), None

    if isinstance(raw, Mapping):
        return cfg.object_marker, None

    return str(raw), None


def resolve_display_value(
    field: FieldSchema,
    raw: Any,
    *,
    config: Optional[EngineConfig] = None,
    labels: Optional[LabelResolver] = None,
    components: Optional[Mapping[str, Any]] = None,
) -> FieldValue:
    """Resolve o valor de exibição canônico de um campo."""
    cfg = resolve_config(config)
    label = field_label(field, resolver=labels, components=components)

    if raw is None or raw == "":
        display, option = cfg.empty_token, None
    else:
        display, option = _display(field, raw, cfg)

    return FieldValue(
        key=field.key,
        label=label,
        type=field.type,
        value=raw,
        display_value=display,
        option=option,
        options=list(field.options) if field.options is not None else None,
    )


def resolve_item(
    block: AtlasDataBlock,
    item: Mapping[str, Any],
    *,
    config: Optional[EngineConfig] = None,
    labels: Optional[LabelResolver] = None,
    components: Optional[Mapping[str, Any]] = None,
) -> List[FieldValue]:
    """Um FieldValue por campo do schema, na ordem de declaração."""
    return [
        resolve_display_value(f, item.get(f.key), config=config, labels=labels, components=components)
        for f in block.schema
    ]


def resolve_item_map(
    block: AtlasDataBlock,
    item: Mapping[str, Any],
    *,
    config: Optional[EngineConfig] = None,
) -> Dict[str, str]:
    """Mapa chave → display_value (conveniência para cards e tabelas)."""
    return {fv.key: fv.display_value for fv in resolve_item(block, item, config=config)}
