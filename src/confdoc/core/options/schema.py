# src/confdoc/core/options/schema.py
"""
Registro canônico de opções de configuração.

Este módulo define o `OptionRegistry`, responsável por declarar opções
nomeadas e tipadas, com defaults e descrições, e por preservar a ordem
de declaração para o composer e para o renderizador externo.

O registro atua como uma camada de proteção antecipada, garantindo que:
    - cada opção possua um caminho pontuado válido
    - não existam caminhos duplicados
    - nenhuma opção seja declarada "dentro" de outra opção

Responsabilidades do módulo:
    - Declarar OptionSpec imutáveis
    - Produzir a árvore de defaults (base da composição)
    - Registrar renomeações de opções e aplicá-las a configurações do usuário

Decisões arquiteturais:
    - O tipo declarado é informativo (documentação); não há validação de tipo
    - A ordem de declaração é preservada explicitamente
    - Renomeações movem valores, nunca os descartam silenciosamente

Invariantes:
    - Cada caminho é único no registro
    - OptionSpec nunca é alterado após a declaração
    - `defaults_tree()` sempre devolve uma nova árvore

Limites explícitos:
    - Não compõe fragmentos
    - Não renderiza documentação
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from ..config.errors import DuplicateOptionError, OptionPathConflictError
from ..config.merge import copy_tree
from ..tree import MISSING, has_path, pop_path, set_path, split_path


class OptionType(str, Enum):
    """
    Tipos declarados de opção.

    Os valores são strings para facilitar a renderização e a
    serialização do registro.
    """
    BOOL = "bool"
    STR = "str"
    PATH = "path"
    LIST = "list"
    ATTRS = "attrs"


@dataclass(frozen=True)
class OptionSpec:
    """
    Declaração imutável de uma opção.

    Campos:
        - path: caminho pontuado (ex.: "documentation.man.enable")
        - type: tipo declarado
        - default: valor default (pode conter artefatos)
        - description: texto humano usado apenas pela documentação
        - example: exemplo opcional (texto literal ou árvore, pode conter artefatos)
    """
    path: str
    type: OptionType
    default: Any
    description: str
    example: Any = None


@dataclass
class OptionRegistry:
    """
    Registro de OptionSpec em ordem de declaração.

    Além das opções, guarda renomeações `antigo → novo`, usadas para
    migrar configurações de usuário escritas com caminhos legados.
    """

    _options: Dict[str, OptionSpec] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _renames: Dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def declare(
        self,
        path: str,
        *,
        type: OptionType,
        default: Any,
        description: str,
        example: Any = None,
    ) -> OptionSpec:
        parts = split_path(path)

        if path in self._options:
            raise DuplicateOptionError(f"Duplicate option: {path}")

        for existing in self._order:
            existing_parts = existing.split(".")
            shorter = min(len(parts), len(existing_parts))
            if parts[:shorter] == existing_parts[:shorter]:
                raise OptionPathConflictError(
                    f"Option '{path}' conflicts with declared option '{existing}'"
                )

        spec = OptionSpec(
            path=path,
            type=OptionType(type),
            default=default,
            description=textwrap.dedent(description).strip(),
            example=example,
        )
        self._options[path] = spec
        self._order.append(path)
        return spec

    def get(self, path: str) -> OptionSpec:
        if path not in self._options:
            raise KeyError(path)
        return self._options[path]

    def __contains__(self, path: object) -> bool:
        return path in self._options

    def __iter__(self) -> Iterator[OptionSpec]:
        return (self._options[p] for p in self._order)

    def __len__(self) -> int:
        return len(self._order)

    @property
    def options(self) -> Tuple[OptionSpec, ...]:
        return tuple(self)

    def defaults_tree(self) -> Dict[str, Any]:
        """Árvore aninhada com o default de cada opção declarada."""
        tree: Dict[str, Any] = {}
        for spec in self:
            set_path(tree, spec.path, copy_tree(spec.default))
        return tree

    # -----------------------------
    # Renomeações
    # -----------------------------
    def rename(self, old: str, new: str) -> None:
        split_path(old)
        split_path(new)
        if old in self._renames:
            raise DuplicateOptionError(f"Duplicate rename: {old}")
        self._renames[old] = new

    @property
    def renames(self) -> Dict[str, str]:
        return dict(self._renames)

    def apply_renames(self, tree: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
        """
        Move valores de caminhos renomeados para seus caminhos novos.

        Returns:
            Tuple[Dict, List[str]]: nova árvore e um aviso por valor movido.
            Se o caminho novo também estiver definido, ele prevalece e o
            valor antigo é descartado com aviso explícito.
        """
        result = copy_tree(dict(tree))
        warnings: List[str] = []
        for old, new in self._renames.items():
            value = pop_path(result, old)
            if value is MISSING:
                continue
            if has_path(result, new):
                warnings.append(
                    f"The option '{old}' has been renamed to '{new}'; "
                    f"both are set, keeping '{new}'"
                )
                continue
            set_path(result, new, value)
            warnings.append(f"The option '{old}' has been renamed to '{new}'")
        return result, warnings
