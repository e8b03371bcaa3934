# src/confdoc/core/compose/composer.py
"""
Composer canônico de fragmentos condicionais.

Este módulo resolve a configuração final a partir de uma árvore base
(defaults do schema, já sobrepostos pela configuração do usuário) e de
uma sequência ordenada de fragmentos condicionais.

Pipeline de composição (executado uma vez por invocação):
    1. Avaliar o predicado de cada fragmento uma única vez, sobre a base
    2. Aplicar, em ordem de declaração, o deep-merge dos payloads ativos
    3. Executar todas as asserções de todos os fragmentos ativos, em ordem
       de declaração, coletando todas as falhas (sem curto-circuito); uma
       verificação que levanta exceção conta como falha
    4. Falhas → CompositionError com todas as mensagens; senão ResolvedConfig

Decisões arquiteturais:
    - A ordem de merge é a ordem de declaração, explícita e testável
    - Listas acumulam (append); escalares de fragmentos posteriores prevalecem
    - Erros de configuração são reportados em lote

Invariantes:
    - A mesma base e a mesma sequência de fragmentos produzem o mesmo resultado
    - Nenhum resultado parcial é produzido quando alguma asserção falha
    - Fragmentos e base não são mutados

Limites explícitos:
    - Não carrega arquivos (ver `core.config.loader`)
    - Não valida tipos de opção
    - Não sanitiza artefatos (ver `core.scrub`)
"""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from ..config.errors import CompositionError
from ..config.merge import copy_tree, deep_merge
from .fragment import Fragment
from .resolved import ResolvedConfig


def _validate_names(fragments: Sequence[Fragment]) -> None:
    seen = set()
    for fragment in fragments:
        name = getattr(fragment, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("fragment.name must be a non-empty string")
        if name in seen:
            raise ValueError(f"Duplicate fragment name: {name}")
        seen.add(name)


def compose(base: Mapping[str, Any], fragments: Sequence[Fragment]) -> ResolvedConfig:
    """
    Compõe fragmentos condicionais sobre uma árvore base.

    Args:
        base (Mapping[str, Any]): Árvore base (ou ResolvedConfig anterior).
        fragments (Sequence[Fragment]): Fragmentos em ordem de declaração.

    Returns:
        ResolvedConfig: Configuração resolvida, com os nomes dos fragmentos
        ativos e inativos para rastreabilidade.

    Raises:
        ValueError: Se houver nome de fragmento vazio ou duplicado.
        CompositionError: Se alguma asserção de fragmento ativo falhar.
        StructuralError: Se a base ou algum payload for estruturalmente inválido.
    """
    fragment_list = list(fragments)
    _validate_names(fragment_list)

    base_view = ResolvedConfig.of(base)

    active: List[Fragment] = []
    inactive: List[str] = []
    for fragment in fragment_list:
        if fragment.is_active(base_view):
            active.append(fragment)
        else:
            inactive.append(fragment.name)

    merged = base_view.to_dict()
    for fragment in active:
        merged = deep_merge(merged, fragment.payload)

    resolved = ResolvedConfig(
        merged,
        active_fragments=tuple(f.name for f in active),
        inactive_fragments=tuple(inactive),
    )

    failures: List[str] = []
    failing_fragments: List[str] = []
    for fragment in active:
        for assertion in fragment.assertions:
            try:
                holds = assertion.holds(resolved)
            except Exception as exc:
                holds = False
                message = f"{assertion.message} (check raised {type(exc).__name__}: {exc})"
            else:
                message = assertion.message
            if not holds:
                failures.append(message)
                if fragment.name not in failing_fragments:
                    failing_fragments.append(fragment.name)

    if failures:
        raise CompositionError(failures, fragments=failing_fragments)

    return resolved


def resolve_settings(defaults: Mapping[str, Any], *overrides: Mapping[str, Any]) -> ResolvedConfig:
    """Sobrepõe configurações explícitas (ex.: do usuário) aos defaults, em ordem."""
    tree = copy_tree(dict(defaults))
    for override in overrides:
        tree = deep_merge(tree, override)
    return ResolvedConfig(tree)
