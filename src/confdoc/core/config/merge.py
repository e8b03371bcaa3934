# src/confdoc/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
confdoc para sobrepor payloads de fragmentos à configuração em
resolução, e para aplicar a configuração do usuário sobre os defaults
do schema.

Política de merge (v2):
    - mapa + mapa   → merge recursivo por chave
    - lista + lista → concatenação (base, depois override)
    - qualquer outro par → o valor do override prevalece
      (escalar, artefato, ou lista sobre não-lista)

A política de listas é *append*: fragmentos escritos de forma
independente (ex.: "info pages" e "dev docs") acumulam entradas como
pacotes extras e saídas a instalar, enquanto escalares continuam
podendo ser sobrescritos por fragmentos posteriores.

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - Artefatos nunca são copiados nem inspecionados

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas
    - Mapas e listas do resultado nunca são compartilhados com os inputs

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida semântica de domínio
    - Não realiza coerção de tipos
"""

from typing import Any, Callable, Dict, Mapping, Optional, Set

from ..tree import (
    NodeKind,
    classify,
    is_artifact as default_is_artifact,
    is_collection,
    join_path,
    rebuild_collection,
)
from .errors import StructuralError


def copy_tree(
    value: Any,
    is_artifact: Callable[[Any], bool] = default_is_artifact,
    _path: str = "",
    _stack: Optional[Set[int]] = None,
) -> Any:
    """
    Copia estruturalmente mapas e coleções, preservando folhas por referência.

    Diferente de `copy.deepcopy`, esta função nunca desce em artefatos
    nem copia objetos opacos, de modo que nenhuma avaliação é forçada.

    Raises:
        StructuralError: Se um mapa ou coleção for alcançável a partir de si mesmo.
    """
    stack = set() if _stack is None else _stack
    kind = classify(value, is_artifact)

    if kind is NodeKind.ARTIFACT:
        return value

    if kind is NodeKind.MAP or is_collection(value):
        marker = id(value)
        if marker in stack:
            raise StructuralError(f"Ciclo detectado em '{_path or '<root>'}'", path=_path or None)
        stack.add(marker)
        try:
            if kind is NodeKind.MAP:
                return {
                    k: copy_tree(v, is_artifact, join_path(_path, str(k)), stack)
                    for k, v in value.items()
                }
            return rebuild_collection(
                value,
                [copy_tree(v, is_artifact, f"{_path}[{i}]", stack) for i, v in enumerate(value)],
            )
        finally:
            stack.discard(marker)

    return value


def deep_merge(
    base: Mapping[str, Any],
    override: Mapping[str, Any],
    is_artifact: Callable[[Any], bool] = default_is_artifact,
) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre duas árvores de configuração.

    Esta função combina uma árvore base com um payload de override,
    produzindo uma nova estrutura resultante sem mutar nenhum dos inputs.

    Política de merge (v2):
        - mapa + mapa   → merge recursivo por chave
        - lista + lista → concatenação, preservando a ordem (base, override)
        - demais pares  → override prevalece

    Invariantes:
        - A estrutura retornada é sempre um novo dicionário
        - Chaves não presentes no override são preservadas da base
        - O mesmo par (base, override) sempre produz o mesmo resultado

    Args:
        base (Mapping[str, Any]): Árvore base (ex.: defaults ou resultado parcial).
        override (Mapping[str, Any]): Payload aplicado por cima da base.
        is_artifact (Callable): Predicado de artefato; artefatos são folhas opacas.

    Returns:
        Dict[str, Any]: Nova árvore resultante do deep-merge.

    Raises:
        StructuralError: Se alguma raiz não for mapa ou se houver ciclo.
    """

    if classify(base, is_artifact) is not NodeKind.MAP or classify(override, is_artifact) is not NodeKind.MAP:
        raise StructuralError(
            f"Deep-merge requer mapas no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    return _merge_maps(copy_tree(base, is_artifact), override, is_artifact, "")


def _merge_maps(
    result: Dict[str, Any],
    override: Mapping[str, Any],
    is_artifact: Callable[[Any], bool],
    path: str,
) -> Dict[str, Any]:
    # `result` já é uma cópia estrutural; pode ser mutado aqui.
    for key, override_value in override.items():
        key_path = join_path(path, str(key))
        incoming = copy_tree(override_value, is_artifact, key_path)

        if key not in result:
            result[key] = incoming
            continue

        base_value = result[key]
        base_kind = classify(base_value, is_artifact)
        override_kind = classify(incoming, is_artifact)

        # mapa -> merge recursivo
        if base_kind is NodeKind.MAP and override_kind is NodeKind.MAP:
            result[key] = _merge_maps(base_value, incoming, is_artifact, key_path)
            continue

        # lista -> append
        if isinstance(base_value, list) and isinstance(incoming, list):
            result[key] = base_value + incoming
            continue

        # escalar/artefato -> sobrescrita
        result[key] = incoming

    return result
