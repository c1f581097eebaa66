"""
Atlas DataBlock — Transformadores de view.

Cada transformador é uma função pura de `AtlasDataBlock` para uma estrutura
derivada, efêmera e própria da chamada:

    - list_view → passthrough + ordenação + agrupamento (+ DataFrame)
    - kanban    → colunas 1-D e swimlanes 2-D
    - calendar  → eventos, grade mensal/semanal e heatmap anual
    - timeline  → eventos cronológicos, janela de gantt e estatísticas
    - tree      → árvore recursiva e achatamento em pré-ordem
    - graph     → arestas e filtro de nós conectados
    - gallery   → itens, categorias, ordenação e masonry
"""

from .list_view import ListGroup, ListView, group_items, list_view, sort_items, to_dataframe, visible_fields  # noqa: F401
from .kanban import KanbanColumn, KanbanSwimlane, kanban_columns, kanban_swimlanes  # noqa: F401
from .calendar import (  # noqa: F401
    CalendarDay,
    CalendarEvent,
    CalendarWeek,
    HeatmapDay,
    HeatmapStats,
    assign_to_grid,
    heat_level,
    heat_values,
    heatmap,
    month_grid,
    parse_events,
    week_days,
    week_grid,
    year_weeks,
)
from .timeline import (  # noqa: F401
    TimelineEvent,
    TimelineRange,
    TimelineStats,
    parse_timeline,
    timeline_range,
    timeline_rows,
    timeline_stats,
)
from .tree import GraphNode, TreeNode, count_nodes, flatten_tree, parse_tree  # noqa: F401
from .graph import GraphEdge, GraphView, build_graph, connected_nodes, parse_edges  # noqa: F401
from .gallery import (  # noqa: F401
    GalleryItem,
    GalleryStats,
    categories,
    filter_by_category,
    gallery_stats,
    group_by_category,
    masonry_columns,
    parse_gallery,
    sort_gallery,
)
