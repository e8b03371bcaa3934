# src/confdoc/core/assembly/directives.py
"""
Diretivas de instalação derivadas da configuração resolvida.

As diretivas são leituras simples de caminhos fixos do ResolvedConfig,
convertidas em valores planos (booleanos, listas de strings). Artefatos
referenciados aparecem apenas pelo nome lógico; nenhum é construído.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..compose import ResolvedConfig
from ..scrub import scrub
from ..tree import is_collection, is_placeholder, placeholder_name


@dataclass(frozen=True)
class InstallDirectives:
    install_man: bool
    install_info: bool
    install_doc: bool
    install_dev: bool
    install_nixos_manual: bool
    generate_caches: bool
    paths_to_link: Tuple[str, ...] = ()
    extra_outputs: Tuple[str, ...] = ()
    system_packages: Tuple[str, ...] = ()
    extra_module_sources: Tuple[str, ...] = ()
    extra_setup: Optional[str] = None
    help_line: Optional[str] = None


def _plain_list(resolved: ResolvedConfig, path: str) -> List[Any]:
    value = resolved.get(path)
    if value is None:
        return []
    value = list(value) if is_collection(value) else [value]
    return scrub(value, prefix=path)


def _package_name(value: Any) -> str:
    if is_placeholder(value):
        return placeholder_name(value)
    return str(value)


def derive_directives(resolved: ResolvedConfig) -> InstallDirectives:
    docs = resolved.enabled("documentation.enable")

    def on(path: str) -> bool:
        return docs and resolved.enabled(path)

    return InstallDirectives(
        install_man=on("documentation.man.enable"),
        install_info=on("documentation.info.enable"),
        install_doc=on("documentation.doc.enable"),
        install_dev=on("documentation.dev.enable"),
        install_nixos_manual=on("documentation.nixos.enable"),
        generate_caches=on("documentation.man.enable") and resolved.enabled("documentation.man.generateCaches"),
        paths_to_link=tuple(str(p) for p in _plain_list(resolved, "environment.pathsToLink")),
        extra_outputs=tuple(str(o) for o in _plain_list(resolved, "environment.extraOutputsToInstall")),
        system_packages=tuple(_package_name(p) for p in _plain_list(resolved, "environment.systemPackages")),
        extra_module_sources=tuple(
            str(s) for s in _plain_list(resolved, "documentation.nixos.extraModuleSources")
        ),
        extra_setup=resolved.get("environment.extraSetup"),
        help_line=resolved.get("services.getty.helpLine"),
    )
