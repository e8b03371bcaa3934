# src/confdoc/core/compose/fragment.py
"""
Fragmentos condicionais de configuração.

Um fragmento é uma configuração parcial escrita de forma independente,
ativa sob seu próprio predicado booleano, acompanhada de asserções que
detectam configurações contraditórias.

Componentes principais:
    - Assertion → (check, message) avaliada sobre a configuração composta
    - Fragment  → (name, payload, when, assertions)
    - helpers de predicado: enabled, disabled, all_of, any_of, negate
    - helpers de asserção: forbid_all, require
    - guard     → aplica um predicado externo a um grupo de fragmentos

Predicados recebem a configuração base (ResolvedConfig) explicitamente;
nenhum estado global de "configuração corrente" é consultado.

Invariantes:
    - Fragmentos são imutáveis; o composer apenas os lê
    - Predicados devem ser determinísticos e livres de efeitos colaterais
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Sequence, Tuple, Union

if TYPE_CHECKING:
    from .resolved import ResolvedConfig

Predicate = Callable[["ResolvedConfig"], bool]
When = Union[bool, Predicate]


@dataclass(frozen=True)
class Assertion:
    """Invariante de um fragmento: `check(resolved)` deve ser verdadeiro."""
    check: Predicate
    message: str

    def holds(self, resolved: "ResolvedConfig") -> bool:
        return bool(self.check(resolved))


@dataclass(frozen=True)
class Fragment:
    """
    Configuração parcial condicional.

    Campos:
        - name: identificador único do fragmento na sequência composta
        - payload: árvore parcial (formato de mapa) sobreposta quando ativo
        - when: booleano ou predicado sobre a configuração base
        - assertions: invariantes verificadas após o merge, se ativo
    """
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    when: When = True
    assertions: Tuple[Assertion, ...] = ()

    def is_active(self, base: "ResolvedConfig") -> bool:
        if isinstance(self.when, bool):
            return self.when
        return bool(self.when(base))


# -----------------------------
# Predicados
# -----------------------------

def enabled(path: str) -> Predicate:
    """Verdadeiro quando o valor em `path` é exatamente `True` (ausente conta como falso)."""
    def predicate(cfg: "ResolvedConfig") -> bool:
        return cfg.enabled(path)
    predicate.__qualname__ = f"enabled({path})"
    return predicate


def disabled(path: str) -> Predicate:
    def predicate(cfg: "ResolvedConfig") -> bool:
        return not cfg.enabled(path)
    predicate.__qualname__ = f"disabled({path})"
    return predicate


def _as_predicate(when: When) -> Predicate:
    if isinstance(when, bool):
        return lambda cfg: when
    return when


def all_of(*predicates: When) -> Predicate:
    preds = [_as_predicate(p) for p in predicates]
    return lambda cfg: all(bool(p(cfg)) for p in preds)


def any_of(*predicates: When) -> Predicate:
    preds = [_as_predicate(p) for p in predicates]
    return lambda cfg: any(bool(p(cfg)) for p in preds)


def negate(predicate: When) -> Predicate:
    pred = _as_predicate(predicate)
    return lambda cfg: not pred(cfg)


# -----------------------------
# Asserções
# -----------------------------

def forbid_all(paths: Sequence[str], message: str) -> Assertion:
    """Falha quando todos os caminhos estão habilitados ao mesmo tempo."""
    paths = tuple(paths)
    return Assertion(check=negate(all_of(*[enabled(p) for p in paths])), message=message)


def require(path: str, message: str) -> Assertion:
    return Assertion(check=enabled(path), message=message)


# -----------------------------
# Agrupamento
# -----------------------------

def guard(when: When, fragments: Iterable[Fragment]) -> Tuple[Fragment, ...]:
    """Condiciona um grupo de fragmentos a um predicado externo adicional."""
    return tuple(replace(f, when=all_of(when, f.when)) for f in fragments)
