# src/confdoc/core/config/hashing.py
"""
Hashing canônico de configuração do confdoc.

Este módulo gera o hash determinístico de uma árvore de configuração
já sanitizada (sem artefatos), usado como identidade estrutural da
configuração resolvida em cada montagem de documentação.

Princípios fundamentais:
    - Hashing determinístico e reprodutível
    - Independente da ordem original das chaves
    - Baseado em serialização JSON canônica
    - Algoritmo criptográfico estável (SHA-256)

Invariantes:
    - Árvores estruturalmente equivalentes produzem o mesmo hash
    - Placeholders participam do hash como strings comuns
    - Artefatos crus nunca são serializados (erro explícito)
    - Caminhos (`os.PathLike`) participam como strings; conjuntos, ordenados
"""


import json
import hashlib
import os
from typing import Dict, Any

from ..tree import Artifact


def _canonical_default(value: Any) -> Any:
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, Artifact):
        raise TypeError(
            f"Artefato não sanitizado na configuração: {value.name!r} "
            "(aplique scrub antes do hashing)"
        )
    raise TypeError(f"Valor não serializável na configuração: {type(value).__name__}")


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de uma árvore de configuração sanitizada.

    Política de hashing (v1):
        - Serialização JSON canônica
        - Ordenação estável de chaves
        - Separadores compactos (sem espaços supérfluos)
        - Codificação UTF-8
        - Algoritmo SHA-256

    Args:
        config (Dict[str, Any]): Árvore sanitizada.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto não for um dicionário, contiver artefatos ou
            valores sem forma canônica.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_canonical_default,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
