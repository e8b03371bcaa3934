# src/confdoc/core/scrub/scrubber.py
"""
Scrubber canônico de artefatos de build.

Gerar documentação a partir da configuração completa exigiria avaliar
(construir) cada artefato referenciado, o que é caro e pode ter efeitos
colaterais. O scrubber produz uma cópia estruturalmente idêntica da
árvore na qual cada artefato é substituído por um placeholder
`${<caminho-lógico>}`, tornando a geração de documentação barata e
livre de efeitos colaterais.

Política de travessia (v1):
    - mapa     → recursão por chave (profundidade primeiro)
    - artefato → placeholder com o nome lógico do artefato
    - coleção  → recursão por elemento (listas, tuplas e conjuntos; tuplas e
                 conjuntos mantêm o tipo, demais sequências viram listas)
    - escalar  → repassado sem alteração

Nome lógico:
    - nome intrínseco do artefato, quando reportado
    - caso contrário, o caminho pontuado da posição (ex.: `pkgs.a.b.c`),
      com `[i]` para elementos de coleções

Invariantes:
    - Todo artefato da entrada corresponde a exatamente um placeholder
      na mesma posição da saída
    - O formato mapa/chave da saída é idêntico ao da entrada fora das
      posições de artefato
    - Placeholders são terminais: reaplicar o scrub é a identidade
    - Nenhum artefato é inspecionado além da identidade necessária para nomeá-lo

Limites explícitos:
    - Não constrói nem realiza artefatos
    - Não renderiza a árvore
    - Não muta a entrada
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping, Optional, Set, Tuple

from ..config.errors import StructuralError
from ..tree import (
    NodeKind,
    artifact_name,
    classify,
    is_artifact as default_is_artifact,
    is_collection,
    is_placeholder,
    join_path,
    placeholder,
    placeholder_name,
    rebuild_collection,
)

NameOf = Callable[[Any, str], Optional[str]]


def scrub(
    tree: Any,
    is_artifact: Callable[[Any], bool] = default_is_artifact,
    name_of: NameOf = artifact_name,
    *,
    prefix: Optional[str] = None,
) -> Any:
    """
    Substitui recursivamente cada artefato da árvore por um placeholder.

    Args:
        tree (Any): ConfigTree de entrada (normalmente um mapa; um artefato
            na raiz é substituído por inteiro).
        is_artifact (Callable): Predicado que identifica nós artefato.
        name_of (Callable): Deriva o nome lógico de `(nó, caminho)`. O padrão
            prefere o nome intrínseco e cai para a posição na árvore.
        prefix (Optional[str]): Caminho lógico da raiz (ex.: "pkgs").

    Returns:
        Any: Nova árvore sanitizada.

    Raises:
        StructuralError: Se houver ciclo ou se um artefato não puder
            reportar identidade.
    """
    return _scrub_node(tree, prefix or "", is_artifact, name_of, set())


def _scrub_node(
    node: Any,
    path: str,
    is_artifact: Callable[[Any], bool],
    name_of: NameOf,
    stack: Set[int],
) -> Any:
    kind = classify(node, is_artifact)

    if kind is NodeKind.ARTIFACT:
        name = name_of(node, path)
        if not name:
            raise StructuralError(
                f"Artefato sem identidade em '{path or '<root>'}'",
                path=path or None,
            )
        return placeholder(name)

    if kind is NodeKind.SCALAR and not is_collection(node):
        return node

    marker = id(node)
    if marker in stack:
        raise StructuralError(f"Ciclo detectado em '{path or '<root>'}'", path=path or None)
    stack.add(marker)
    try:
        if kind is NodeKind.MAP:
            return {
                key: _scrub_node(value, join_path(path, str(key)), is_artifact, name_of, stack)
                for key, value in node.items()
            }
        return rebuild_collection(
            node,
            [
                _scrub_node(value, f"{path}[{index}]", is_artifact, name_of, stack)
                for index, value in enumerate(node)
            ],
        )
    finally:
        stack.discard(marker)


def iter_placeholders(tree: Any, _path: str = "") -> Iterator[Tuple[str, str]]:
    """Gera `(posição, nome lógico)` para cada placeholder de uma árvore sanitizada."""
    if isinstance(tree, Mapping):
        for key, value in tree.items():
            yield from iter_placeholders(value, join_path(_path, str(key)))
    elif is_collection(tree):
        for index, value in enumerate(tree):
            yield from iter_placeholders(value, f"{_path}[{index}]")
    elif is_placeholder(tree):
        yield _path, placeholder_name(tree)


def find_artifacts(
    tree: Any,
    is_artifact: Callable[[Any], bool] = default_is_artifact,
    _path: str = "",
) -> Iterator[str]:
    """Gera as posições de artefatos ainda presentes (árvore não sanitizada)."""
    kind = classify(tree, is_artifact)
    if kind is NodeKind.ARTIFACT:
        yield _path or "<root>"
    elif kind is NodeKind.MAP:
        for key, value in tree.items():
            yield from find_artifacts(value, is_artifact, join_path(_path, str(key)))
    elif is_collection(tree):
        for index, value in enumerate(tree):
            yield from find_artifacts(value, is_artifact, f"{_path}[{index}]")
