"""
Resolução de valores do Atlas DataBlock.

Submódulos:
    - dates    → política de parsing de datas em horário local
    - locales  → presets de formatação (datas, moeda, tokens)
    - resolver → valor de exibição canônico por FieldSchema

Este pacote não reexporta símbolos: importe dos submódulos.
"""
