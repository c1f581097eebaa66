# src/atlas_datablock/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas DataBlock.

As exceções aqui definidas representam violações estruturais explícitas
da configuração do engine, e não falhas de parsing de documentos.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de configuração são fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa bloco malformado em documento
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do engine.

    Limites explícitos:
        - Não representa erro de parsing de data block
        - Não representa erro de transformação de view
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Arquivo de configuração informado explicitamente não existe.

    Decisões arquiteturais:
        - Um caminho de defaults explícito é obrigatório quando informado
        - O override local ausente é ignorado (não é erro)
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato do arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"display": {"locale": "zh-CN"}}
        - override: {"display": "en-US"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class UnknownLocaleError(ConfigError):
    """Locale configurado não possui preset de formatação."""
