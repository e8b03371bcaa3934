# src/confdoc/core/options/documentation.py
"""
Opções do módulo de documentação.

Declara o schema de `documentation.*`: quais tipos de documentação são
instalados no sistema (man, info, doc, dev) e como o manual do próprio
sistema é gerado. Também registra as renomeações de opções legadas.
"""

from __future__ import annotations

from .schema import OptionRegistry, OptionType

DOCUMENTATION_RENAMES = (
    ("programs.info.enable", "documentation.info.enable"),
    ("programs.man.enable", "documentation.man.enable"),
    ("services.nixosManual.enable", "documentation.nixos.enable"),
)


def declare_documentation_options(registry: OptionRegistry) -> OptionRegistry:
    registry.declare(
        "documentation.enable",
        type=OptionType.BOOL,
        default=True,
        description="""
          Whether to install documentation of packages from
          environment.systemPackages into the generated system path.

          See "Multiple-output packages" chapter in the nixpkgs manual for more info.
        """,
    )
    registry.declare(
        "documentation.man.enable",
        type=OptionType.BOOL,
        default=True,
        description="""
          Whether to install manual pages.
          This also includes man outputs.
        """,
    )
    registry.declare(
        "documentation.man.generateCaches",
        type=OptionType.BOOL,
        default=False,
        description="""
          Whether to generate the manual page index caches.
          This allows searching for a page or keyword using utilities
          like apropos(1) and the -k option of man(1).
        """,
    )
    registry.declare(
        "documentation.info.enable",
        type=OptionType.BOOL,
        default=True,
        description="""
          Whether to install info pages and the info command.
          This also includes "info" outputs.
        """,
    )
    registry.declare(
        "documentation.doc.enable",
        type=OptionType.BOOL,
        default=True,
        description="""
          Whether to install documentation distributed in packages' /share/doc.
          Usually plain text and/or HTML.
          This also includes "doc" outputs.
        """,
    )
    registry.declare(
        "documentation.dev.enable",
        type=OptionType.BOOL,
        default=False,
        description="""
          Whether to install documentation targeted at developers.
          This includes man pages targeted at developers if
          documentation.man.enable is set (this also includes "devman" outputs),
          info pages targeted at developers if documentation.info.enable is set
          (this also includes "devinfo" outputs) and other pages targeted at
          developers if documentation.doc.enable is set (this also includes
          "devdoc" outputs).
        """,
    )
    registry.declare(
        "documentation.nixos.enable",
        type=OptionType.BOOL,
        default=True,
        description="""
          Whether to install the system's own documentation.
          This includes man pages like configuration.nix(5) if
          documentation.man.enable is set, and the HTML manual and the
          nixos-help command if documentation.doc.enable is set.
        """,
    )
    registry.declare(
        "documentation.nixos.includeAllModules",
        type=OptionType.BOOL,
        default=False,
        description="""
          Whether the generated documentation should include documentation for
          all the options from all the modules included in the current
          configuration. Disabling this makes the manual generator ignore
          options defined outside of the base modules.
        """,
    )
    registry.declare(
        "documentation.nixos.extraModuleSources",
        type=OptionType.LIST,
        default=[],
        description="""
          Which extra module paths the generated documentation should strip
          from options.
        """,
        example="[ pkgs.customModules ]",
    )

    for old, new in DOCUMENTATION_RENAMES:
        registry.rename(old, new)

    return registry


def build_documentation_registry() -> OptionRegistry:
    return declare_documentation_options(OptionRegistry())
