# src/confdoc/core/documentation/__init__.py
"""
Fragmentos canônicos do módulo de documentação.
"""

from .fragments import (
    HELP_LINE,
    MAN_VIEWER_CONFLICT,
    ManualArtifacts,
    documentation_fragments,
)

__all__ = [
    "HELP_LINE",
    "MAN_VIEWER_CONFLICT",
    "ManualArtifacts",
    "documentation_fragments",
]
