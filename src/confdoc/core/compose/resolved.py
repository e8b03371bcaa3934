# src/confdoc/core/compose/resolved.py
"""
ResolvedConfig — visão canônica e somente-leitura da configuração resolvida.

Uma instância é criada uma vez por passo de composição e tratada como
imutável a partir daí: leituras devolvem cópias estruturais de mapas e
listas, de modo que nenhum consumidor consegue alterar o estado interno.
Qualquer mudança exige executar `compose` novamente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Tuple

from ..config.merge import copy_tree
from ..tree import MISSING, get_path


@dataclass(frozen=True)
class ResolvedConfig(Mapping[str, Any]):
    """
    Árvore de configuração resolvida, consultável por caminho pontuado.

    `get`, `has` e `enabled` recebem caminhos pontuados; a interface de
    Mapping (`in`, `[]`, iteração) opera apenas sobre chaves de nível raiz.

    Campos:
        - active_fragments: nomes dos fragmentos aplicados, em ordem
        - inactive_fragments: nomes dos fragmentos cujo predicado foi falso
    """
    _tree: Dict[str, Any] = field(repr=False)
    active_fragments: Tuple[str, ...] = ()
    inactive_fragments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "_tree", copy_tree(dict(self._tree)))

    @classmethod
    def of(cls, tree: Mapping[str, Any]) -> "ResolvedConfig":
        if isinstance(tree, ResolvedConfig):
            return tree
        return cls(dict(tree))

    def get(self, path: str, default: Any = None) -> Any:  # type: ignore[override]
        value = get_path(self._tree, path, MISSING)
        if value is MISSING:
            return default
        return copy_tree(value)

    def has(self, path: str) -> bool:
        """Verdadeiro quando o caminho pontuado existe na árvore."""
        return get_path(self._tree, path, MISSING) is not MISSING

    def enabled(self, path: str) -> bool:
        return get_path(self._tree, path) is True

    def to_dict(self) -> Dict[str, Any]:
        return copy_tree(self._tree)

    # Mapping (nível raiz)
    def __getitem__(self, key: str) -> Any:
        return copy_tree(self._tree[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def __contains__(self, key: object) -> bool:
        return key in self._tree
