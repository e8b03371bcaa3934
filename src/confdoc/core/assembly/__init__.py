# src/confdoc/core/assembly/__init__.py
"""
Adapter de montagem: compõe, sanitiza e entrega ao renderizador externo.
"""

from .adapter import (
    AssemblyResult,
    ManualRenderer,
    ManualRequest,
    assemble_documentation,
)
from .directives import InstallDirectives, derive_directives

__all__ = [
    "AssemblyResult",
    "InstallDirectives",
    "ManualRenderer",
    "ManualRequest",
    "assemble_documentation",
    "derive_directives",
]
