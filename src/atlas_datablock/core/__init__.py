# src/atlas_datablock/core/__init__.py
"""
Core do Atlas DataBlock.

Este pacote reúne as responsabilidades transversais do engine, independentes
de qualquer view:

Componentes principais:
    - config      → defaults, carregamento, merge e hashing de configuração
    - context     → contexto de observabilidade (eventos e warnings por estágio)
    - diagnostics → payloads canônicos de descarte e degradação
    - errors      → hierarquia de exceções do engine
    - hashing     → hash canônico de blocos (chave de memoização)

Limites explícitos:
    - Não contém lógica de parsing nem de views
    - Não depende de UI ou de serviços externos

Este pacote não reexporta símbolos: importe dos submódulos.
"""
