"""
Presets de formatação por locale.

Cada preset descreve, sem depender de bibliotecas de i18n, como o resolver
formata datas longas, moeda, números e tokens textuais. Os presets cobrem o
locale do front end original (`zh-CN`) e dois locales adicionais.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class LocalePreset:
    code: str
    # str.format com campos year/month/day/month_name
    date_long: str
    date_short: str
    month_names: Tuple[str, ...]
    decimal_sep: str
    group_sep: str
    currency: str
    # "{symbol}{amount}" ou "{symbol} {amount}"
    currency_pattern: str
    yes: str
    no: str
    untitled: str
    uncategorized: str
    days_ago: str
    hours_ago: str
    minutes_ago: str
    just_now: str
    currency_symbols: Dict[str, str] = field(default_factory=dict)

    def month_name(self, month: int) -> str:
        return self.month_names[month - 1]


_SYMBOLS = {
    "CNY": "¥",
    "JPY": "¥",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "BRL": "R$",
}


ZH_CN = LocalePreset(
    code="zh-CN",
    date_long="{year}年{month}月{day}日",
    date_short="{year}/{month:02d}/{day:02d}",
    month_names=tuple(f"{m}月" for m in range(1, 13)),
    decimal_sep=".",
    group_sep=",",
    currency="CNY",
    currency_pattern="{symbol}{amount}",
    yes="是",
    no="否",
    untitled="未命名",
    uncategorized="未分类",
    days_ago="{n} 天前",
    hours_ago="{n} 小时前",
    minutes_ago="{n} 分钟前",
    just_now="刚刚",
    currency_symbols=dict(_SYMBOLS),
)

EN_US = LocalePreset(
    code="en-US",
    date_long="{month_name} {day}, {year}",
    date_short="{month:02d}/{day:02d}/{year}",
    month_names=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    decimal_sep=".",
    group_sep=",",
    currency="USD",
    currency_pattern="{symbol}{amount}",
    yes="Yes",
    no="No",
    untitled="Untitled",
    uncategorized="Uncategorized",
    days_ago="{n} days ago",
    hours_ago="{n} hours ago",
    minutes_ago="{n} minutes ago",
    just_now="just now",
    currency_symbols={**_SYMBOLS, "CNY": "CN¥"},
)

PT_BR = LocalePreset(
    code="pt-BR",
    date_long="{day} de {month_name} de {year}",
    date_short="{day:02d}/{month:02d}/{year}",
    month_names=(
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
    decimal_sep=",",
    group_sep=".",
    currency="BRL",
    currency_pattern="{symbol} {amount}",
    yes="Sim",
    no="Não",
    untitled="Sem título",
    uncategorized="Sem categoria",
    days_ago="há {n} dias",
    hours_ago="há {n} horas",
    minutes_ago="há {n} minutos",
    just_now="agora",
    currency_symbols={**_SYMBOLS, "USD": "US$", "CNY": "CN¥"},
)


LOCALES: Dict[str, LocalePreset] = {p.code: p for p in (ZH_CN, EN_US, PT_BR)}
