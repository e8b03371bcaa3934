# src/confdoc/core/tree/__init__.py
"""
Nós tipados de ConfigTree: variantes, artefatos, placeholders e acesso por caminho.
"""

from .nodes import (
    DERIVATION_TYPE,
    MISSING,
    Artifact,
    NodeKind,
    artifact_name,
    classify,
    get_path,
    has_path,
    is_artifact,
    is_collection,
    is_placeholder,
    join_path,
    placeholder,
    placeholder_name,
    rebuild_collection,
    pop_path,
    set_path,
    split_path,
)

__all__ = [
    "DERIVATION_TYPE",
    "MISSING",
    "Artifact",
    "NodeKind",
    "artifact_name",
    "classify",
    "get_path",
    "has_path",
    "is_artifact",
    "is_collection",
    "is_placeholder",
    "join_path",
    "placeholder",
    "placeholder_name",
    "rebuild_collection",
    "pop_path",
    "set_path",
    "split_path",
]
