"""
confdoc — Canonical Error Structures (v1)

Este módulo define o payload canônico de erro do confdoc, usado para
reportar falhas de montagem da documentação a quem invoca o pipeline
(ex.: um entry point de linha de comando fora do core).

Erros reportados devem ser:
- explícitos
- serializáveis
- acionáveis (indicam onde corrigir)

Nenhuma recuperação automática é feita a partir destes payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional, Sequence


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do confdoc.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - messages: todas as mensagens individuais (ex.: cada asserção violada)
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """
    type: str
    message: str
    messages: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_STRUCTURAL_ERROR = "CONFIG_STRUCTURAL_ERROR"
CONFIG_COMPOSITION_FAILED = "CONFIG_COMPOSITION_FAILED"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def structural_error(
    *,
    message: str,
    path: Optional[str] = None,
    hint: str = "Corrija a árvore de entrada: ciclos e artefatos sem identidade não são suportados.",
) -> ErrorPayload:
    return ErrorPayload(
        type=CONFIG_STRUCTURAL_ERROR,
        message="Árvore de configuração estruturalmente inválida",
        messages=[message],
        details={"path": path},
        hint=hint,
    )


def composition_failed(
    *,
    messages: Sequence[str],
    fragments: Sequence[str] = (),
    hint: str = "Ajuste as opções conflitantes na configuração e reexecute a montagem.",
) -> ErrorPayload:
    return ErrorPayload(
        type=CONFIG_COMPOSITION_FAILED,
        message=f"{len(messages)} asserção(ões) de configuração violada(s)",
        messages=list(messages),
        details={"fragments": list(fragments)},
        hint=hint,
    )
