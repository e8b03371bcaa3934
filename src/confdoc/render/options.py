"""
Options Renderer (v1)

Renderizador de referência do manual de opções.

Objetivo:
- Renderizar o registro de opções (path, type, default, description) em HTML.
- Fornecer fallback textual (JSON pretty) com as opções e a árvore sanitizada.
- NÃO altera o request.
- NÃO resolve placeholders: `${pkgs.foo}` é exibido literalmente.
- NÃO aceita artefatos crus (o request deve vir do scrubber).

Saídas:
- HTML (string)
- texto (JSON pretty ou repr)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence
import copy
import html
import json

from confdoc.core.assembly import ManualRequest
from confdoc.core.scrub import find_artifacts


@dataclass(frozen=True)
class RenderResult:
    """Resultado de renderização (apenas apresentação)."""
    html: Optional[str]  # HTML string (quando aplicável)
    text: str            # fallback textual (sempre preenchido)


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _as_pretty_json(payload: Any) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    except TypeError:
        return repr(payload)


def _literal(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    except TypeError:
        return repr(value)


def render_table_html(rows: Sequence[Mapping[str, Any]], title: Optional[str] = None) -> str:
    """
    Renderiza list[dict] como tabela:
    - colunas = união das chaves (ordem estável)
    - lista vazia -> aviso "(empty)"
    """
    heading = f"<h4>{_escape(title)}</h4>" if title else ""

    if not rows:
        return f"{heading}<div><em>(empty)</em></div>"

    columns = []
    seen = set()
    for row in rows:
        for k in row.keys():
            if k not in seen:
                columns.append(k); seen.add(k)

    th = "".join(f"<th>{_escape(c)}</th>" for c in columns)
    trs = []
    for row in rows:
        tds = "".join(f"<td>{_escape(row.get(c))}</td>" for c in columns)
        trs.append(f"<tr>{tds}</tr>")

    return (
        f"{heading}"
        "<table>"
        f"<thead><tr>{th}</tr></thead>"
        "<tbody>" + "".join(trs) + "</tbody>"
        "</table>"
    )


class OptionsRenderer:
    """Implementação de referência de `ManualRenderer`."""

    def __init__(self, *, title: str = "Configuration Options"):
        self.title = title

    def render(self, request: ManualRequest) -> RenderResult:
        leaked = list(find_artifacts(request.tree))
        leaked += [
            spec.path
            for spec in request.options
            if list(find_artifacts(spec.default)) or list(find_artifacts(spec.example))
        ]
        if leaked:
            raise AssertionError(f"Options renderer received raw artifacts at: {', '.join(leaked)}")

        before = copy.deepcopy(request.tree)

        rows = [
            {
                "option": spec.path,
                "type": spec.type.value,
                "default": _literal(spec.default),
                "description": spec.description,
            }
            for spec in request.options
        ]

        html_out = (
            f"<h3>{_escape(self.title)}</h3>"
            f"<div style='opacity:0.75'>{_escape(request.revision)}</div>"
            + render_table_html(rows)
        )
        text_out = _as_pretty_json(
            {
                "revision": request.revision,
                "options": rows,
                "tree": request.tree,
            }
        )

        if before != request.tree:
            raise AssertionError("Options renderer mutated the request tree")

        return RenderResult(html=html_out, text=text_out)
