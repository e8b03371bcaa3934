# tests/core/tree/test_nodes.py
"""
Testes das variantes de nó, placeholders e acesso por caminho pontuado.

Os testes asseguram que:
- artefatos são classificados antes de mapas
- placeholders são reconhecidos e nunca confundidos com artefatos
- o nome intrínseco de um artefato prevalece sobre sua posição
- leituras por caminho não falham em caminhos ausentes
"""

import pytest

from confdoc.core.tree import (
    MISSING,
    Artifact,
    NodeKind,
    artifact_name,
    classify,
    get_path,
    is_artifact,
    is_collection,
    is_placeholder,
    placeholder,
    placeholder_name,
    pop_path,
    rebuild_collection,
    set_path,
)


def test_classify_variants():
    assert classify({"a": 1}) is NodeKind.MAP
    assert classify("text") is NodeKind.SCALAR
    assert classify(["a", "b"]) is NodeKind.SCALAR
    assert classify(Artifact("pkgs.foo")) is NodeKind.ARTIFACT


def test_derivation_map_is_artifact_not_map():
    node = {"type": "derivation", "name": "foo-1.0"}
    assert is_artifact(node)
    assert classify(node) is NodeKind.ARTIFACT


def test_classify_with_custom_predicate():
    assert classify("x", is_artifact=lambda v: v == "x") is NodeKind.ARTIFACT


def test_placeholder_round_trip_and_terminality():
    value = placeholder("pkgs.foo")
    assert value == "${pkgs.foo}"
    assert is_placeholder(value)
    assert placeholder_name(value) == "pkgs.foo"
    assert not is_artifact(value)


def test_placeholder_name_rejects_plain_strings():
    assert not is_placeholder("pkgs.foo")
    assert not is_placeholder("${a}/bin/b")
    with pytest.raises(ValueError):
        placeholder_name("pkgs.foo")


def test_artifact_name_prefers_intrinsic_name():
    assert artifact_name(Artifact("pkgs.texinfo"), "pkgs.texinfoInteractive") == "pkgs.texinfo"
    assert artifact_name(Artifact(), "a.b.c") == "a.b.c"
    assert artifact_name(Artifact(), "") is None


def test_artifact_is_never_realized_by_equality():
    calls = []
    a = Artifact("x", builder=lambda: calls.append(1))
    b = Artifact("x", builder=lambda: calls.append(2))
    assert a == b
    assert calls == []


def test_artifact_realize_without_builder_raises():
    with pytest.raises(RuntimeError):
        Artifact("x").realize()


def test_get_path_reads_nested_and_defaults():
    tree = {"a": {"b": {"c": 1}}, "pkg": Artifact("p")}
    assert get_path(tree, "a.b.c") == 1
    assert get_path(tree, "a.x.c", "d") == "d"
    assert get_path(tree, "pkg.out") is None


def test_set_and_pop_path():
    tree = {}
    set_path(tree, "a.b.c", True)
    assert tree == {"a": {"b": {"c": True}}}
    assert pop_path(tree, "a.b.c") is True
    assert tree == {}
    assert pop_path(tree, "a.b.c") is MISSING


@pytest.mark.parametrize("bad", ["", "a..b", ".a"])
def test_invalid_paths_rejected(bad):
    with pytest.raises(ValueError):
        get_path({}, bad)


@pytest.mark.parametrize("value", [["a"], ("a",), {"a"}, frozenset({"a"}), range(2)])
def test_collections_are_walkable(value):
    assert is_collection(value)


@pytest.mark.parametrize("value", ["abc", b"abc", {"a": 1}, 3, None, Artifact("pkgs.foo")])
def test_strings_maps_and_leaves_are_not_collections(value):
    assert not is_collection(value)


def test_rebuild_collection_keeps_tuple_and_set_types():
    assert rebuild_collection((1, 2), ["x", "y"]) == ("x", "y")
    assert rebuild_collection(frozenset({1}), ["x"]) == frozenset({"x"})
    assert rebuild_collection({1}, ["x"]) == {"x"}
    assert rebuild_collection(range(2), ["x", "y"]) == ["x", "y"]
