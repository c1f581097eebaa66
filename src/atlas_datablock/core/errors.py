"""Erros canônicos do domínio de Data Block (Atlas DataBlock).

Um bloco `atlas-data` é uma entrada semi-estruturada embutida no texto de um
documento. Falhas de decodificação/validação de um bloco devem produzir erros
explícitos e estáveis, mesmo quando o parser decide descartar a ocorrência.
"""


class DataBlockError(Exception):
    """Erro base do domínio de data blocks."""


class BlockDecodeError(DataBlockError):
    """Falha ao decodificar o YAML de uma ocorrência."""


class BlockValidationError(DataBlockError):
    """Bloco decodificado não é estruturalmente válido (schema/data)."""
