# src/confdoc/core/compose/__init__.py
"""
Composição condicional de fragmentos de configuração.

Responsabilidades do pacote:
    - Declarar fragmentos, predicados e asserções
    - Dobrar fragmentos ativos sobre a base via deep-merge ordenado
    - Verificar asserções e reportar todas as falhas de uma vez
    - Expor o ResolvedConfig imutável
"""

from .composer import compose, resolve_settings
from .fragment import (
    Assertion,
    Fragment,
    all_of,
    any_of,
    disabled,
    enabled,
    forbid_all,
    guard,
    negate,
    require,
)
from .resolved import ResolvedConfig

__all__ = [
    "Assertion",
    "Fragment",
    "ResolvedConfig",
    "all_of",
    "any_of",
    "compose",
    "disabled",
    "enabled",
    "forbid_all",
    "guard",
    "negate",
    "require",
    "resolve_settings",
]
