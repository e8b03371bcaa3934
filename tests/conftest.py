# tests/conftest.py
"""
Fixtures compartilhados para testes do confdoc.

Este módulo define fixtures reutilizáveis que fornecem:
- árvores de pacotes com artefatos (inclusive aninhados e com nome intrínseco)
- artefatos "contadores", que registram qualquer tentativa de realização
- o registro de opções de documentação

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture realiza artefatos
    - Dados retornados são determinísticos e isolados por teste
"""

import pytest

from confdoc.core.tree import Artifact


class BuildCounter:
    """Conta quantas vezes algum artefato foi realizado."""

    def __init__(self):
        self.calls = []

    def builder(self, name):
        def build():
            self.calls.append(name)
            return f"/store/{name}"
        return build


@pytest.fixture
def build_counter() -> BuildCounter:
    return BuildCounter()


@pytest.fixture
def pkgs_tree(build_counter):
    """
    Árvore de pacotes semelhante à do sistema de build.

    Contém:
    - artefato direto (`hello`)
    - artefato aninhado em vários níveis (`python3Packages.requests`)
    - artefato com nome intrínseco diferente da posição (`texinfoInteractive`)
    - derivação representada como mapa (`legacy`)
    - escalares e mapas vazios
    """
    return {
        "hello": Artifact(builder=build_counter.builder("hello")),
        "python3Packages": {
            "requests": Artifact(builder=build_counter.builder("requests")),
            "version": "3.11",
        },
        "texinfoInteractive": Artifact(
            name="pkgs.texinfo",
            builder=build_counter.builder("texinfo"),
        ),
        "legacy": {"type": "derivation", "name": "legacy-1.0"},
        "lib": {"version": "23.11", "empty": {}},
    }


@pytest.fixture
def documentation_registry():
    from confdoc.core.options import build_documentation_registry

    return build_documentation_registry()
