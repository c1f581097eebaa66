# src/atlas_datablock/core/config/__init__.py

"""
Camada de configuração do Atlas DataBlock.

Responsabilidades do pacote:
    - Defaults embutidos (fence, locale, campos padrão por view)
    - Carregamento de arquivos de configuração (YAML/JSON) com deep-merge
    - Visão tipada e imutável (`EngineConfig`) consumida pelo engine
    - Hash canônico da configuração efetiva

Invariantes:
    - A configuração final é um dicionário puro antes de materializada
    - A mesma entrada sempre produz a mesma configuração final
    - Conflitos estruturais são tratados como erro
"""

from .defaults import DEFAULT_CONFIG, default_config  # noqa: F401
from .errors import (  # noqa: F401
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    UnknownLocaleError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import load_config  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import EngineConfig, get_default_config, resolve_config  # noqa: F401
