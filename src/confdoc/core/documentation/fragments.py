# src/confdoc/core/documentation/fragments.py
"""
Fragmentos canônicos do módulo de documentação.

Este módulo traduz o comportamento do módulo de documentação em uma
sequência ordenada de fragmentos condicionais, todos subordinados a
`documentation.enable`:

    1. assertions → man-db e mandoc não podem ser o visualizador padrão juntos
    2. man        → liga /share/man e as saídas "man" (+ "devman")
    3. info       → instala o comando info, liga /share/info, saídas "info"
                    (+ "devinfo") e o script de indexação install-info
    4. doc        → liga /share/doc e as saídas "doc" (+ "devdoc")
    5. nixos      → expõe o manual do sistema e seus pacotes

Os payloads dependem de valores já resolvidos (ex.: `dev.enable`), por
isso são construídos a partir das configurações do usuário, passadas
explicitamente.

Limites explícitos:
    - Não constrói o manual (apenas referencia artefatos)
    - Não define o conteúdo de man-db/mandoc (módulos externos)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..compose import Fragment, ResolvedConfig, enabled, forbid_all, guard
from ..tree import Artifact, placeholder

MAN_DB_ENABLE = "documentation.man.man-db.enable"
MANDOC_ENABLE = "documentation.man.mandoc.enable"

MAN_VIEWER_CONFLICT = (
    "man-db and mandoc can't be used as the default man page viewer at the same time!"
)

HELP_LINE = "\nRun 'nixos-help' for the NixOS manual."

TEXINFO_INTERACTIVE = Artifact(name="pkgs.texinfoInteractive")
BUILD_TEXINFO = Artifact(name="pkgs.buildPackages.texinfo")


@dataclass(frozen=True)
class ManualArtifacts:
    """Artefatos produzidos pelo gerador do manual (referenciados, nunca construídos)."""
    manual: Artifact = field(default_factory=lambda: Artifact(name="system.build.manual"))
    manpages: Artifact = field(default_factory=lambda: Artifact(name="system.build.manual.manpages"))
    manual_html: Artifact = field(default_factory=lambda: Artifact(name="system.build.manual.manualHTML"))
    help_command: Artifact = field(default_factory=lambda: Artifact(name="nixos-help"))


def _install_info_script(texinfo: Artifact) -> str:
    return (
        "if [ -w $out/share/info ]; then\n"
        "  shopt -s nullglob\n"
        "  for i in $out/share/info/*.info $out/share/info/*.info.gz; do\n"
        f"      {placeholder(texinfo.name)}/bin/install-info $i $out/share/info/dir\n"
        "  done\n"
        "fi\n"
    )


def _outputs(name: str, dev: bool) -> List[str]:
    return [name, f"dev{name}"] if dev else [name]


def documentation_fragments(
    settings: ResolvedConfig,
    manual: ManualArtifacts = ManualArtifacts(),
) -> Tuple[Fragment, ...]:
    """
    Constrói os fragmentos do módulo de documentação para as configurações dadas.

    Args:
        settings (ResolvedConfig): Defaults do schema já sobrepostos pela
            configuração do usuário.
        manual (ManualArtifacts): Artefatos do manual a referenciar.

    Returns:
        Tuple[Fragment, ...]: Fragmentos em ordem de declaração, todos
        condicionados a `documentation.enable`.
    """
    dev = settings.enabled("documentation.dev.enable")
    man = settings.enabled("documentation.man.enable")
    doc = settings.enabled("documentation.doc.enable")

    nixos_payload: Dict[str, Any] = {
        "system": {"build": {"manual": manual.manual}},
        "environment": {"systemPackages": []},
    }
    if man:
        nixos_payload["environment"]["systemPackages"].append(manual.manpages)
    if doc:
        nixos_payload["environment"]["systemPackages"].extend(
            [manual.manual_html, manual.help_command]
        )
        nixos_payload["services"] = {"getty": {"helpLine": HELP_LINE}}

    fragments = (
        Fragment(
            name="assertions",
            assertions=(forbid_all([MAN_DB_ENABLE, MANDOC_ENABLE], MAN_VIEWER_CONFLICT),),
        ),
        Fragment(
            name="man",
            when=enabled("documentation.man.enable"),
            payload={
                "environment": {
                    "pathsToLink": ["/share/man"],
                    "extraOutputsToInstall": _outputs("man", dev),
                }
            },
        ),
        Fragment(
            name="info",
            when=enabled("documentation.info.enable"),
            payload={
                "environment": {
                    "systemPackages": [TEXINFO_INTERACTIVE],
                    "pathsToLink": ["/share/info"],
                    "extraOutputsToInstall": _outputs("info", dev),
                    "extraSetup": _install_info_script(BUILD_TEXINFO),
                }
            },
        ),
        Fragment(
            name="doc",
            when=enabled("documentation.doc.enable"),
            payload={
                "environment": {
                    "pathsToLink": ["/share/doc"],
                    "extraOutputsToInstall": _outputs("doc", dev),
                }
            },
        ),
        Fragment(
            name="nixos",
            when=enabled("documentation.nixos.enable"),
            payload=nixos_payload,
        ),
    )

    return guard(enabled("documentation.enable"), fragments)
