# src/confdoc/core/tree/nodes.py
"""
Variantes canônicas de nó de uma ConfigTree.

Uma ConfigTree é uma estrutura recursiva onde cada nó é exatamente uma
das variantes abaixo:

    - MAP      → mapeamento de chave string para ConfigTree
    - SCALAR   → valor primitivo (str, bool, número) ou coleção (lista, tupla, conjunto)
    - ARTIFACT → valor opaco que representa uma saída de build

A classificação é explícita (`classify`) e sempre testa artefato antes
de qualquer outra variante: um mapa marcado como derivação é um artefato,
não um mapa.

Placeholders:
    Um placeholder é uma string `${<caminho-lógico>}` que substitui um
    artefato durante o scrubbing. Placeholders são valores terminais:
    nunca são artefatos e nunca são re-sanitizados.

Invariantes:
    - Artefatos são tratados como caixas-pretas com identidade
    - Nenhuma função deste módulo realiza (constrói) um artefato

Limites explícitos:
    - Não percorre árvores (ver `core.scrub`)
    - Não realiza merge (ver `core.config.merge`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Any, Callable, Iterable, Mapping, Optional, Sequence

# Marcador usado pelo sistema de pacotes para identificar derivações
# representadas como mapas.
DERIVATION_TYPE = "derivation"

_PLACEHOLDER_RE = re.compile(r"^\$\{([^{}]+)\}$")

MISSING = object()


class NodeKind(str, Enum):
    """
    Variantes possíveis de um nó de ConfigTree.

    Os valores são strings para facilitar serialização em eventos
    de log e mensagens de erro.
    """
    MAP = "map"
    SCALAR = "scalar"
    ARTIFACT = "artifact"


@dataclass(frozen=True)
class Artifact:
    """
    Nó opaco que representa uma saída de build.

    Campos:
        - name: nome lógico intrínseco (ex.: "pkgs.texinfo"). Quando presente,
          prevalece sobre a posição do nó na árvore.
        - builder: callable opcional que realizaria o artefato. O core nunca
          o invoca; existe apenas para colaboradores externos.

    Igualdade e hash consideram apenas o nome.
    """
    name: Optional[str] = None
    builder: Optional[Callable[[], Any]] = field(default=None, compare=False, repr=False)

    def realize(self) -> Any:
        if self.builder is None:
            raise RuntimeError(f"Artefato sem builder: {self.name!r}")
        return self.builder()


def is_artifact(value: Any) -> bool:
    """Predicado padrão de artefato: `Artifact` ou mapa com `type = "derivation"`."""
    if isinstance(value, Artifact):
        return True
    if isinstance(value, Mapping):
        return value.get("type") == DERIVATION_TYPE
    return False


def classify(value: Any, is_artifact: Callable[[Any], bool] = is_artifact) -> NodeKind:
    if is_artifact(value):
        return NodeKind.ARTIFACT
    if isinstance(value, Mapping):
        return NodeKind.MAP
    return NodeKind.SCALAR


def is_collection(value: Any) -> bool:
    """Sequências (exceto strings e bytes) e conjuntos são percorridos elemento a elemento."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, AbstractSet))


def rebuild_collection(original: Any, items: Iterable[Any]) -> Any:
    """Reconstrói tuplas e conjuntos com o mesmo tipo; demais sequências viram listas."""
    if type(original) in (tuple, set, frozenset):
        return type(original)(items)
    return list(items)


def placeholder(name: str) -> str:
    return "${" + name + "}"


def is_placeholder(value: Any) -> bool:
    return isinstance(value, str) and _PLACEHOLDER_RE.match(value) is not None


def placeholder_name(value: str) -> str:
    match = _PLACEHOLDER_RE.match(value)
    if match is None:
        raise ValueError(f"Valor não é um placeholder: {value!r}")
    return match.group(1)


def artifact_name(node: Any, path: str) -> Optional[str]:
    """
    Deriva o nome lógico de um artefato.

    Política:
        - nome intrínseco (`Artifact.name`) prevalece quando presente
        - caso contrário, o caminho pontuado da posição na árvore
        - sem nenhum dos dois → None (o chamador decide o erro)

    Apenas o atributo de identidade é lido; o artefato nunca é realizado.
    """
    intrinsic = node.name if isinstance(node, Artifact) else None
    if intrinsic:
        return intrinsic
    return path or None


def join_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def split_path(path: str) -> list[str]:
    if not isinstance(path, str) or not path.strip():
        raise ValueError("path must be a non-empty dotted string")
    parts = path.split(".")
    if any(not p for p in parts):
        raise ValueError(f"Invalid dotted path: {path!r}")
    return parts


def get_path(tree: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Lê o valor no caminho pontuado; retorna `default` se algum segmento faltar."""
    node: Any = tree
    for key in split_path(path):
        if not isinstance(node, Mapping) or is_artifact(node):
            return default
        node = node.get(key, MISSING)
        if node is MISSING:
            return default
    return node


def has_path(tree: Mapping[str, Any], path: str) -> bool:
    return get_path(tree, path, MISSING) is not MISSING


def set_path(tree: dict, path: str, value: Any) -> None:
    """Escreve `value` no caminho pontuado, criando mapas intermediários (muta `tree`)."""
    parts = split_path(path)
    node = tree
    for key in parts[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[parts[-1]] = value


def pop_path(tree: dict, path: str) -> Any:
    """Remove e retorna o valor no caminho pontuado; mapas que ficam vazios são removidos."""
    parts = split_path(path)
    trail = []
    node: Any = tree
    for key in parts[:-1]:
        if not isinstance(node, dict) or key not in node:
            return MISSING
        trail.append((node, key))
        node = node[key]
    if not isinstance(node, dict) or parts[-1] not in node:
        return MISSING
    value = node.pop(parts[-1])
    for parent, key in reversed(trail):
        if parent[key] == {}:
            del parent[key]
    return value


