# src/confdoc/core/options/__init__.py
"""
Registro de opções tipadas (schema) e opções do módulo de documentação.
"""

from .documentation import (
    DOCUMENTATION_RENAMES,
    build_documentation_registry,
    declare_documentation_options,
)
from .schema import OptionRegistry, OptionSpec, OptionType

__all__ = [
    "DOCUMENTATION_RENAMES",
    "OptionRegistry",
    "OptionSpec",
    "OptionType",
    "build_documentation_registry",
    "declare_documentation_options",
]
