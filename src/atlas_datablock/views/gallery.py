"""
View canônica: galeria (grid, masonry e estante por categoria).

Responsabilidades:
- Converter registros em `GalleryItem` com a opção de categoria resolvida
- Agrupar por categoria (rótulo da opção > valor bruto > token "sem categoria")
- Ordenar, filtrar e distribuir itens em colunas de masonry

Invariantes:
- Grupos e categorias seguem a ordem de primeira aparição
- Ordenações são estáveis
- A altura simulada de um item no masonry depende apenas do seu `id`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from atlas_datablock.core.config.settings import EngineConfig, resolve_config
from atlas_datablock.schema.model import AtlasDataBlock, SelectOption
from atlas_datablock.values.dates import parse_local_datetime
from atlas_datablock.values.resolver import split_tags

SORT_DATE = "date"
SORT_LIKES = "likes"
SORT_TITLE = "title"

MASONRY_BASE_HEIGHT = 200
MASONRY_HEIGHT_SPREAD = 150


@dataclass(frozen=True)
class GalleryItem:
    id: str
    title: str
    cover: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    category_option: Optional[SelectOption] = None
    author: Optional[str] = None
    likes: Optional[float] = None
    date: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    url: Optional[str] = None


@dataclass(frozen=True)
class GalleryStats:
    total: int
    categories: int
    likes: float
    authors: int


def _text(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    return str(raw)


def _likes(raw: Any) -> Optional[float]:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return raw


def parse_gallery(block: AtlasDataBlock, *, config: Optional[EngineConfig] = None) -> List[GalleryItem]:
    cfg = resolve_config(config)
    cover_key = block.cover_field or cfg.gallery_cover_field
    category_field = block.get_field("category")

    items = []
    for item in block.data:
        category = item.get("category")
        tags = item.get("tags")
        items.append(
            GalleryItem(
                id=item["id"],
                title=_text(item.get("title")) or _text(item.get("name")) or cfg.untitled,
                cover=_text(item.get(cover_key)),
                description=_text(item.get("description")),
                category=_text(category),
                category_option=category_field.find_option(category) if category_field is not None else None,
                author=_text(item.get("author")),
                likes=_likes(item.get("likes")),
                date=parse_local_datetime(item.get("date")),
                tags=split_tags(tags) if tags not in (None, "") else [],
                url=_text(item.get("url")),
            )
        )
    return items


def category_label(item: GalleryItem, *, config: Optional[EngineConfig] = None) -> str:
    if item.category_option is not None:
        return item.category_option.label
    if item.category is not None:
        return item.category
    return resolve_config(config).uncategorized


def group_by_category(
    items: Sequence[GalleryItem],
    *,
    config: Optional[EngineConfig] = None,
) -> Dict[str, List[GalleryItem]]:
    groups: Dict[str, List[GalleryItem]] = {}
    for item in items:
        groups.setdefault(category_label(item, config=config), []).append(item)
    return groups


def sort_gallery(items: Sequence[GalleryItem], sort_by: str = SORT_DATE) -> List[GalleryItem]:
    """
    - date: mais recente primeiro, sem data por último
    - likes: mais curtidas primeiro (ausente = 0)
    - title: ordem alfabética crescente
    """
    if sort_by == SORT_LIKES:
        return sorted(items, key=lambda i: -(i.likes or 0))
    if sort_by == SORT_TITLE:
        return sorted(items, key=lambda i: i.title or "")
    if sort_by == SORT_DATE:
        dated = sorted((i for i in items if i.date is not None), key=lambda i: i.date, reverse=True)
        return dated + [i for i in items if i.date is None]
    raise ValueError(f"unknown gallery sort: {sort_by}")


def categories(items: Sequence[GalleryItem]) -> List[str]:
    """Rótulos de opção de categoria, na ordem de primeira aparição."""
    seen: List[str] = []
    for item in items:
        if item.category_option is not None and item.category_option.label not in seen:
            seen.append(item.category_option.label)
    return seen


def filter_by_category(items: Sequence[GalleryItem], label: Optional[str]) -> List[GalleryItem]:
    if label is None:
        return list(items)
    return [i for i in items if i.category_option is not None and i.category_option.label == label]


def masonry_height(item: GalleryItem) -> int:
    return MASONRY_BASE_HEIGHT + sum(ord(ch) for ch in item.id) % MASONRY_HEIGHT_SPREAD


def masonry_columns(items: Sequence[GalleryItem], columns: int) -> List[List[GalleryItem]]:
    """Cada item vai para a coluna mais baixa; empates vão para a mais à esquerda."""
    if columns < 1:
        raise ValueError("columns must be >= 1")
    result: List[List[GalleryItem]] = [[] for _ in range(columns)]
    heights = [0] * columns
    for item in items:
        index = heights.index(min(heights))
        result[index].append(item)
        heights[index] += masonry_height(item)
    return result


def gallery_stats(items: Sequence[GalleryItem], *, config: Optional[EngineConfig] = None) -> GalleryStats:
    return GalleryStats(
        total=len(items),
        categories=len(group_by_category(items, config=config)),
        likes=sum(i.likes or 0 for i in items),
        authors=len({i.author for i in items if i.author}),
    )
