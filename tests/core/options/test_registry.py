# tests/core/options/test_registry.py
"""
Testes do registro de opções (schema) e das opções de documentação.

Os testes asseguram que:
- declarações preservam ordem e são imutáveis
- caminhos duplicados ou sobrepostos são rejeitados
- a árvore de defaults é sempre uma cópia nova
- renomeações movem valores legados para os caminhos novos
"""

import dataclasses

import pytest

from confdoc.core.config.errors import DuplicateOptionError, OptionPathConflictError
from confdoc.core.options import OptionRegistry, OptionType
from confdoc.core.tree import Artifact


def test_declare_and_iterate_in_order():
    registry = OptionRegistry()
    registry.declare("b.enable", type=OptionType.BOOL, default=True, description="B")
    registry.declare("a.enable", type=OptionType.BOOL, default=False, description="A")

    assert [spec.path for spec in registry] == ["b.enable", "a.enable"]
    assert len(registry) == 2
    assert "a.enable" in registry
    assert registry.get("a.enable").default is False


def test_option_spec_is_immutable():
    registry = OptionRegistry()
    spec = registry.declare("a", type="str", default="x", description="  text  ")

    assert spec.type is OptionType.STR
    assert spec.description == "text"
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.default = "y"


def test_duplicate_option_rejected():
    registry = OptionRegistry()
    registry.declare("a.enable", type=OptionType.BOOL, default=True, description="")
    with pytest.raises(DuplicateOptionError):
        registry.declare("a.enable", type=OptionType.BOOL, default=True, description="")


@pytest.mark.parametrize("path", ["a", "a.enable.deep"])
def test_overlapping_paths_rejected(path):
    registry = OptionRegistry()
    registry.declare("a.enable", type=OptionType.BOOL, default=True, description="")
    with pytest.raises(OptionPathConflictError):
        registry.declare(path, type=OptionType.BOOL, default=True, description="")


def test_get_unknown_option_raises():
    with pytest.raises(KeyError):
        OptionRegistry().get("nope")


def test_defaults_tree_is_fresh_copy():
    registry = OptionRegistry()
    registry.declare("x.list", type=OptionType.LIST, default=[], description="")
    registry.declare("x.pkg", type=OptionType.ATTRS, default=Artifact("pkgs.foo"), description="")

    tree = registry.defaults_tree()
    tree["x"]["list"].append("mutated")

    assert registry.defaults_tree() == {"x": {"list": [], "pkg": Artifact("pkgs.foo")}}
    assert registry.get("x.list").default == []


def test_apply_renames_moves_values():
    registry = OptionRegistry()
    registry.rename("programs.man.enable", "documentation.man.enable")

    tree, warnings = registry.apply_renames({"programs": {"man": {"enable": False}}, "other": 1})

    assert tree == {"documentation": {"man": {"enable": False}}, "other": 1}
    assert warnings == ["The option 'programs.man.enable' has been renamed to 'documentation.man.enable'"]


def test_apply_renames_new_path_wins():
    registry = OptionRegistry()
    registry.rename("old.enable", "new.enable")

    tree, warnings = registry.apply_renames({"old": {"enable": False}, "new": {"enable": True}})

    assert tree == {"new": {"enable": True}}
    assert "both are set" in warnings[0]


def test_apply_renames_does_not_mutate_input():
    registry = OptionRegistry()
    registry.rename("old.enable", "new.enable")
    user = {"old": {"enable": False}}

    registry.apply_renames(user)

    assert user == {"old": {"enable": False}}


def test_documentation_registry_defaults(documentation_registry):
    tree = documentation_registry.defaults_tree()

    assert tree == {
        "documentation": {
            "enable": True,
            "man": {"enable": True, "generateCaches": False},
            "info": {"enable": True},
            "doc": {"enable": True},
            "dev": {"enable": False},
            "nixos": {
                "enable": True,
                "includeAllModules": False,
                "extraModuleSources": [],
            },
        }
    }


def test_documentation_registry_descriptions_and_renames(documentation_registry):
    for spec in documentation_registry:
        assert spec.description
        assert not spec.description.startswith(" ")

    assert documentation_registry.renames == {
        "programs.info.enable": "documentation.info.enable",
        "programs.man.enable": "documentation.man.enable",
        "services.nixosManual.enable": "documentation.nixos.enable",
    }
    assert documentation_registry.get("documentation.nixos.extraModuleSources").example
