# tests/views/test_tree_graph.py
"""
Testes das views de árvore e grafo.

Invariantes:
    - `level` começa em 0 e cresce 1 por nível
    - opções de type/status são resolvidas em todas as profundidades
    - o achatamento em pré-ordem preserva a contagem total de nós
    - o grafo mantém apenas nós citados por alguma aresta
"""

from atlas_datablock.schema import validate_block
from atlas_datablock.views.graph import build_graph, connected_nodes, parse_edges
from atlas_datablock.views.tree import GraphNode, count_nodes, flatten_tree, parse_tree


def test_parse_tree_levels_and_nested_options(tree_block):
    roots = parse_tree(tree_block)

    assert len(roots) == 1
    root = roots[0]
    eng, ops = root.children
    ana, bruno = eng.children
    assert (root.level, eng.level, ana.level) == (0, 1, 2)
    assert ana.type_option.label == "Person"
    assert ana.status_option.label == "Active"
    assert bruno.status_option is None
    assert ops.children == []


def test_flatten_is_preorder_and_complete(tree_block):
    roots = parse_tree(tree_block)

    flat = flatten_tree(roots)

    assert [n.id for n in flat] == ["root", "eng", "ana", "bruno", "ops"]
    assert len(flat) == count_nodes(roots) == 5
    assert flat[2].type_option.label == "Person"


def test_children_without_id_get_path_ids():
    block = validate_block(
        {
            "id": "outline",
            "schema": [{"key": "name"}],
            "data": [{"name": "Root", "children": [{"name": "A"}, {"name": "B", "children": [{"name": "B1"}]}]}],
        }
    )

    flat = flatten_tree(parse_tree(block))

    assert [n.id for n in flat] == ["outline-1", "outline-1.1", "outline-1.2", "outline-1.2.1"]
    assert [n.name for n in flat] == ["Root", "A", "B", "B1"]


def test_tree_to_dict_is_nested(tree_block):
    out = parse_tree(tree_block)[0].to_dict()

    assert out["children"][0]["children"][0]["id"] == "ana"
    assert out["children"][0]["status_option"]["label"] == "Active"


def test_parse_edges(graph_block):
    edges = parse_edges(graph_block)

    assert [(e.id, e.source, e.target) for e in edges] == [
        ("eng-ana-0", "eng", "ana"),
        ("ana-eng-1", "ana", "eng"),
    ]
    assert edges[0].relation_option.label == "Manages"
    assert edges[1].relation is None


def test_orphan_nodes_are_excluded():
    """4 nós, 1 aresta entre 2 deles → o grafo tem 2 nós."""
    nodes = [GraphNode(id=i, name=i) for i in ("a", "b", "c", "d")]
    edges = parse_edges(
        validate_block({"schema": [{"key": "source"}, {"key": "target"}], "data": [{"source": "b", "target": "d"}]})
    )

    assert [n.id for n in connected_nodes(nodes, edges)] == ["b", "d"]


def test_build_graph(tree_block, graph_block):
    graph = build_graph(tree_block, graph_block)

    assert [n.id for n in graph.nodes] == ["eng", "ana"]
    assert len(graph.edges) == 2
    # a árvore continua com todos os nós
    assert count_nodes(parse_tree(tree_block)) == 5


def test_edges_to_unknown_nodes_are_kept(tree_block):
    block = validate_block({"schema": [{"key": "source"}], "data": [{"source": "ghost", "target": "ana"}]})

    graph = build_graph(tree_block, block)

    assert [e.source for e in graph.edges] == ["ghost"]
    assert [n.id for n in graph.nodes] == ["ana"]
