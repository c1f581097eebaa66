# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas DataBlock.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de exemplo com blocos atlas-data embutidos
- blocos já materializados para cada família de view
- contexto de observabilidade controlado (EngineContext)
- configurações YAML semelhantes ao uso real

Decisões arquiteturais:
    - Documentos são strings literais; nenhum fixture realiza I/O
    - Blocos são construídos pelo parser real, não por mocks
    - O contexto usa identidade fixa para asserts determinísticos

Invariantes:
    - Nenhuma fixture consulta o relógio para produzir dados
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituem testes de integração de renderização
    - Não contêm lógica condicional complexa
"""

from datetime import datetime, timezone

import pytest

from atlas_datablock.core.context import EngineContext
from atlas_datablock.parser import parse_first_block


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults de projeto, aplicado sobre os defaults embutidos.

    Invariantes:
        - YAML sintaticamente válido
        - Altera apenas chaves existentes, sem conflito de tipo
    """
    return """
parser:
  fence_tag: atlas-data
display:
  locale: en-US
  empty_token: "-"
views:
  kanban:
    group_field: stage
  timeline:
    per_row: 5
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de override local (ambiente do desenvolvedor)."""
    return """
display:
  locale: pt-BR
views:
  kanban:
    swimlane_field: owner
"""


# =====================================================
# Contexto
# =====================================================

@pytest.fixture
def engine_ctx() -> EngineContext:
    """
    EngineContext determinístico.

    A identidade e a data de criação são fixas para que os eventos possam
    ser comparados sem depender de uuid/relógio.
    """
    return EngineContext(
        context_id="ctx-test",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        meta={"source": "tests"},
    )


# =====================================================
# Documentos
# =====================================================

TASKS_DOCUMENT = """# Sprint 12

Notas da sprint.

```atlas-data
id: tasks
type: tasks
title: Sprint board
groupBy: status
swimlaneBy: priority
schema:
  - key: title
    label: Title
    type: text
  - key: status
    label: Status
    type: select
    options:
      - {value: todo, label: To do, color: gray}
      - {value: doing, label: Doing, color: blue}
      - {value: done, label: Done, color: green}
  - key: priority
    label: Priority
    type: select
    options:
      - {value: high, label: High, color: red}
      - {value: low, label: Low, color: slate}
  - key: estimate
    label: Estimate
    type: number
  - key: notes
    label: Notes
    type: textarea
data:
  - {id: t1, title: Login page, status: todo, priority: high, estimate: 3}
  - {id: t2, title: Signup flow, status: doing, priority: low, estimate: 5}
  - {id: t3, title: Password reset, status: done, priority: high, estimate: 2}
  - {id: t4, title: Audit log, status: blocked, priority: low}
```

Fim.
"""


@pytest.fixture
def tasks_document() -> str:
    return TASKS_DOCUMENT


@pytest.fixture
def tasks_block():
    """Bloco de tarefas com `status`/`priority` select e um status fora das options."""
    return parse_first_block(TASKS_DOCUMENT)


CALENDAR_DOCUMENT = """```atlas-data
id: events
type: events
schema:
  - key: title
    type: text
  - key: start_date
    type: datetime
  - key: end_date
    type: datetime
  - key: type
    type: select
    options:
      - {value: meeting, label: Meeting, color: blue}
      - {value: trip, label: Trip, color: green}
data:
  - {id: e1, title: Planning, start_date: "2025-06-15T09:00:00", type: meeting}
  - {id: e2, title: Offsite, start_date: "2025-06-10", end_date: "2025-06-12", type: trip}
  - {id: e3, name: Retro, start_date: "2025-06-15T14:30:00", value: 3}
  - {id: e4, title: Broken, start_date: "not a date"}
```
"""


@pytest.fixture
def calendar_block():
    """Bloco de eventos com datas locais, um intervalo de 3 dias e uma data inválida."""
    return parse_first_block(CALENDAR_DOCUMENT)


TREE_DOCUMENT = """```atlas-data
id: org
type: tree
schema:
  - key: name
    type: text
  - key: type
    type: select
    options:
      - {value: team, label: Team, color: purple}
      - {value: person, label: Person, color: blue}
  - key: status
    type: status
    options:
      - {value: active, label: Active, color: green}
data:
  - id: root
    name: Company
    type: team
    children:
      - id: eng
        name: Engineering
        type: team
        status: active
        children:
          - {id: ana, name: Ana, type: person, status: active}
          - {id: bruno, name: Bruno, type: person}
      - {id: ops, name: Operations, type: team}
```
"""


@pytest.fixture
def tree_block():
    """Árvore com 3 níveis: root → (eng → (ana, bruno), ops)."""
    return parse_first_block(TREE_DOCUMENT)


GRAPH_DOCUMENT = """```atlas-data
id: relations
type: graph
schema:
  - key: source
    type: text
  - key: target
    type: text
  - key: relation
    type: select
    options:
      - {value: manages, label: Manages, color: orange}
data:
  - {source: eng, target: ana, relation: manages}
  - {source: ana, target: eng}
```
"""


@pytest.fixture
def graph_block():
    return parse_first_block(GRAPH_DOCUMENT)


GALLERY_DOCUMENT = """```atlas-data
id: shots
type: gallery
schema:
  - key: title
    type: text
  - key: category
    type: select
    options:
      - {value: ui, label: Interface, color: blue}
      - {value: brand, label: Branding, color: gold}
  - key: likes
    type: number
data:
  - {id: g1, title: Banner, category: brand, likes: 10, author: ana, date: "2025-03-01"}
  - {id: g2, title: App shell, category: ui, likes: 42, author: bruno, date: "2025-05-20"}
  - {id: g3, title: Icons, category: ui, author: ana}
  - {id: g4, title: Sketch, likes: 7, date: "2024-12-24", tags: "draft, paper"}
```
"""


@pytest.fixture
def gallery_block():
    return parse_first_block(GALLERY_DOCUMENT)


TIMELINE_DOCUMENT = """```atlas-data
id: roadmap
type: timeline
endDateField: end_date
schema:
  - key: assignee
    type: text
  - key: title
    type: text
  - key: summary
    type: textarea
  - key: team
    type: tags
  - key: progress
    type: number
  - key: date
    type: date
  - key: end_date
    type: date
  - key: type
    type: select
    options:
      - {value: milestone, label: Milestone, color: purple}
data:
  - {id: m2, assignee: ana, title: Beta, summary: Public beta, team: [web, api], progress: 40, date: "2025-03-10", end_date: "2025-04-20"}
  - {id: m1, assignee: bruno, title: Alpha, progress: 100, date: "2025-01-15", type: milestone}
  - {id: m3, assignee: ana, title: GA, progress: 0, date: "2025-06-01"}
  - {id: m4, title: Undated}
```
"""


@pytest.fixture
def timeline_block():
    """Roadmap: `assignee` vem antes de `title` no schema; um item sem data."""
    return parse_first_block(TIMELINE_DOCUMENT)
