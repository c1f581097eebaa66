# src/atlas_datablock/core/config/settings.py
"""
Visão tipada e imutável da configuração efetiva do engine.

`EngineConfig` é o que parser, resolver e transformadores consomem. Ela é
materializada a partir do dicionário resolvido por `load_config` (ou dos
defaults embutidos) e nunca é mutada depois de criada.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from atlas_datablock.values.locales import LOCALES, LocalePreset

from .defaults import default_config
from .errors import InvalidConfigRootTypeError, UnknownLocaleError
from .merge import deep_merge


def _section(config: Dict[str, Any], *path: str) -> Dict[str, Any]:
    node: Any = config
    for key in path:
        node = node.get(key) if isinstance(node, dict) else None
        if node is None:
            return {}
    if not isinstance(node, dict):
        raise InvalidConfigRootTypeError(f"config.{'.'.join(path)} must be a mapping")
    return node


@dataclass(frozen=True)
class EngineConfig:
    """Configuração efetiva e imutável do engine."""

    fence_tag: str
    locale: str
    empty_token: str
    object_marker: str
    currency: Optional[str]
    untitled_token: Optional[str]
    uncategorized_token: Optional[str]
    kanban_group_field: str
    kanban_swimlane_field: str
    calendar_date_field: str
    timeline_date_field: str
    timeline_per_row: int
    gallery_cover_field: str

    @property
    def preset(self) -> LocalePreset:
        return LOCALES[self.locale]

    @property
    def untitled(self) -> str:
        return self.untitled_token or self.preset.untitled

    @property
    def uncategorized(self) -> str:
        return self.uncategorized_token or self.preset.uncategorized

    @property
    def currency_code(self) -> str:
        return self.currency or self.preset.currency

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "EngineConfig":
        """
        Materializa a configuração a partir de um dicionário resolvido.

        Chaves ausentes herdam os defaults embutidos.

        Raises:
            UnknownLocaleError: Se `display.locale` não possuir preset.
        """
        effective = deep_merge(default_config(), config or {})

        parser = _section(effective, "parser")
        display = _section(effective, "display")
        kanban = _section(effective, "views", "kanban")
        calendar = _section(effective, "views", "calendar")
        timeline = _section(effective, "views", "timeline")
        gallery = _section(effective, "views", "gallery")

        locale = str(display.get("locale"))
        if locale not in LOCALES:
            raise UnknownLocaleError(
                f"unknown locale: {locale} (available: {sorted(LOCALES)})"
            )

        return cls(
            fence_tag=str(parser.get("fence_tag")),
            locale=locale,
            empty_token=str(display.get("empty_token")),
            object_marker=str(display.get("object_marker")),
            currency=display.get("currency"),
            untitled_token=display.get("untitled_token"),
            uncategorized_token=display.get("uncategorized_token"),
            kanban_group_field=str(kanban.get("group_field")),
            kanban_swimlane_field=str(kanban.get("swimlane_field")),
            calendar_date_field=str(calendar.get("date_field")),
            timeline_date_field=str(timeline.get("date_field")),
            timeline_per_row=int(timeline.get("per_row")),
            gallery_cover_field=str(gallery.get("cover_field")),
        )


_DEFAULT: Optional[EngineConfig] = None


def get_default_config() -> EngineConfig:
    """EngineConfig dos defaults embutidos (imutável, seguro para reuso)."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = EngineConfig.from_dict()
    return _DEFAULT


def resolve_config(config: Optional[EngineConfig]) -> EngineConfig:
    return config if config is not None else get_default_config()
