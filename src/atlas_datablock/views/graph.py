"""
View canônica: grafo de relações.

Um bloco de relações descreve uma aresta por registro (`source`, `target`,
`relation`). Combinado com os nós achatados de um bloco de árvore, o grafo
mantém apenas os nós citados por pelo menos uma aresta; os nós órfãos
continuam visíveis na view de árvore.

Limites explícitos:
- Não valida se `source`/`target` existem entre os nós
- Não calcula layout (posições ficam com o renderizador)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from atlas_datablock.schema.model import AtlasDataBlock, SelectOption
from atlas_datablock.views.tree import GraphNode, flatten_tree, parse_tree


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source: str
    target: str
    relation: Optional[str] = None
    relation_option: Optional[SelectOption] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "relation": self.relation,
            "relation_option": self.relation_option.to_dict() if self.relation_option else None,
        }


@dataclass(frozen=True)
class GraphView:
    nodes: List[GraphNode]
    edges: List[GraphEdge]


def _ref(raw: Any) -> str:
    return "" if raw is None else str(raw)


def parse_edges(block: AtlasDataBlock) -> List[GraphEdge]:
    """Uma aresta por registro; id posicional `<source>-<target>-<índice>`."""
    relation_field = block.get_field("relation")
    edges = []
    for index, item in enumerate(block.data):
        source = _ref(item.get("source"))
        target = _ref(item.get("target"))
        relation = item.get("relation")
        edges.append(
            GraphEdge(
                id=f"{source}-{target}-{index}",
                source=source,
                target=target,
                relation=None if relation in (None, "") else str(relation),
                relation_option=relation_field.find_option(relation) if relation_field is not None else None,
            )
        )
    return edges


def connected_nodes(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> List[GraphNode]:
    referenced = set()
    for edge in edges:
        referenced.add(edge.source)
        referenced.add(edge.target)
    return [n for n in nodes if n.id in referenced]


def build_graph(tree_block: AtlasDataBlock, graph_block: AtlasDataBlock) -> GraphView:
    edges = parse_edges(graph_block)
    nodes = connected_nodes(flatten_tree(parse_tree(tree_block)), edges)
    return GraphView(nodes=nodes, edges=edges)
