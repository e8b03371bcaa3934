# tests/core/assembly/test_assembly_adapter.py
"""
Testes do adapter de montagem da documentação.

Os testes asseguram que:
- as diretivas de instalação refletem a configuração resolvida
- a árvore entregue ao renderizador não contém artefatos
- nenhum artefato é realizado durante a montagem
- o renderizador só é chamado quando o manual do sistema está habilitado
- falhas de composição são registradas no contexto e propagadas
"""

from pathlib import Path

import pytest

from confdoc.core.assembly import ManualRequest, assemble_documentation
from confdoc.core.compose import Fragment
from confdoc.core.config.errors import CompositionError, StructuralError
from confdoc.core.context import AssemblyContext
from confdoc.core.documentation import MAN_VIEWER_CONFLICT
from confdoc.core.options import OptionType
from confdoc.core.scrub import find_artifacts
from confdoc.core.tree import Artifact
from confdoc.render import OptionsRenderer


class RecordingRenderer:
    def __init__(self):
        self.requests = []

    def render(self, request: ManualRequest):
        self.requests.append(request)
        return "rendered"


def test_default_directives(pkgs_tree):
    result = assemble_documentation(pkgs=pkgs_tree, version="23.11")
    d = result.directives

    assert (d.install_man, d.install_info, d.install_doc) == (True, True, True)
    assert d.install_dev is False
    assert d.install_nixos_manual is True
    assert d.generate_caches is False
    assert d.paths_to_link == ("/share/man", "/share/info", "/share/doc")
    assert d.extra_outputs == ("man", "info", "doc")
    assert d.system_packages == (
        "pkgs.texinfoInteractive",
        "system.build.manual.manpages",
        "system.build.manual.manualHTML",
        "nixos-help",
    )
    assert d.help_line == "\nRun 'nixos-help' for the NixOS manual."
    assert "install-info" in d.extra_setup


def test_generate_caches_requires_man(pkgs_tree):
    user = {"documentation": {"man": {"enable": False, "generateCaches": True}}}
    result = assemble_documentation(pkgs=pkgs_tree, user_config=user, version="23.11")

    assert result.directives.install_man is False
    assert result.directives.generate_caches is False


def test_scrubbed_tree_has_no_artifacts_and_nothing_is_built(pkgs_tree, build_counter):
    result = assemble_documentation(pkgs=pkgs_tree, version="23.11")

    assert list(find_artifacts(result.scrubbed)) == []
    assert result.scrubbed["pkgs"]["hello"] == "${pkgs.hello}"
    assert result.scrubbed["pkgs"]["python3Packages"]["requests"] == "${pkgs.python3Packages.requests}"
    assert result.scrubbed["pkgs"]["texinfoInteractive"] == "${pkgs.texinfo}"
    assert result.scrubbed["config"]["system"]["build"]["manual"] == "${system.build.manual}"
    assert build_counter.calls == []


def test_renderer_receives_scrubbed_request(pkgs_tree):
    renderer = RecordingRenderer()
    user = {"documentation": {"nixos": {"extraModuleSources": ["/etc/modules"], "includeAllModules": True}}}

    result = assemble_documentation(pkgs=pkgs_tree, user_config=user, version="23.11", renderer=renderer)

    assert result.manual == "rendered"
    (request,) = renderer.requests
    assert request.revision == "release-23.11"
    assert request.version == "23.11"
    assert request.extra_sources == ("/etc/modules",)
    assert request.include_all_modules is True
    assert request.tree is result.scrubbed
    assert [spec.path for spec in request.options][0] == "documentation.enable"
    for spec in request.options:
        assert list(find_artifacts(spec.default)) == []


def test_renderer_skipped_when_manual_disabled(pkgs_tree):
    renderer = RecordingRenderer()
    ctx = AssemblyContext()

    result = assemble_documentation(
        pkgs=pkgs_tree,
        user_config={"documentation": {"nixos": {"enable": False}}},
        version="23.11",
        renderer=renderer,
        ctx=ctx,
    )

    assert renderer.requests == []
    assert result.manual is None
    assert ctx.events_for("render")[0]["message"] == "manual rendering skipped"


def test_renderer_skipped_when_documentation_disabled(pkgs_tree):
    renderer = RecordingRenderer()

    result = assemble_documentation(
        pkgs=pkgs_tree,
        user_config={"documentation": {"enable": False}},
        version="23.11",
        renderer=renderer,
    )

    assert renderer.requests == []
    assert result.directives.install_man is False
    assert result.directives.paths_to_link == ()


def test_composition_failure_is_logged_and_raised(pkgs_tree):
    renderer = RecordingRenderer()
    ctx = AssemblyContext()
    user = {"documentation": {"man": {"man-db": {"enable": True}, "mandoc": {"enable": True}}}}

    with pytest.raises(CompositionError) as exc:
        assemble_documentation(pkgs=pkgs_tree, user_config=user, version="23.11", renderer=renderer, ctx=ctx)

    assert exc.value.messages == (MAN_VIEWER_CONFLICT,)
    assert renderer.requests == []

    failure = ctx.events_for("compose")[-1]
    assert failure["level"] == "ERROR"
    assert failure["error"]["type"] == "CONFIG_COMPOSITION_FAILED"
    assert failure["error"]["messages"] == [MAN_VIEWER_CONFLICT]


def test_extra_fragments_are_composed_after_documentation(pkgs_tree):
    extra = Fragment(name="site", payload={"environment": {"pathsToLink": ["/share/site"]}})
    ctx = AssemblyContext()

    result = assemble_documentation(pkgs=pkgs_tree, version="23.11", extra_fragments=[extra], ctx=ctx)

    assert result.directives.paths_to_link[-1] == "/share/site"
    assert ctx.events_for("compose")[-1]["active"][-1] == "site"


def test_rename_warnings_recorded(pkgs_tree):
    ctx = AssemblyContext()

    result = assemble_documentation(
        pkgs=pkgs_tree,
        user_config={"programs": {"man": {"enable": False}}},
        version="23.11",
        ctx=ctx,
    )

    assert result.directives.install_man is False
    assert ctx.warnings["options"] == [
        "The option 'programs.man.enable' has been renamed to 'documentation.man.enable'"
    ]


def test_unnamed_artifact_is_named_by_position():
    extra = Fragment(name="unnamed", payload={"environment": {"systemPackages": [Artifact()]}})

    result = assemble_documentation(pkgs={}, version="23.11", extra_fragments=[extra])

    assert "${environment.systemPackages[4]}" in result.scrubbed["config"]["environment"]["systemPackages"]


def test_cyclic_pkgs_tree_is_structural_error():
    ctx = AssemblyContext()
    pkgs = {"a": {}}
    pkgs["a"]["self"] = pkgs

    with pytest.raises(StructuralError):
        assemble_documentation(pkgs=pkgs, version="23.11", ctx=ctx)

    assert ctx.events_for("assembly")[-1]["error"]["type"] == "CONFIG_STRUCTURAL_ERROR"


def test_config_hash_is_stable(pkgs_tree):
    first = assemble_documentation(pkgs=pkgs_tree, version="23.11")
    second = assemble_documentation(pkgs=pkgs_tree, version="23.11")
    other = assemble_documentation(
        pkgs=pkgs_tree,
        user_config={"documentation": {"dev": {"enable": True}}},
        version="23.11",
    )

    assert first.config_hash == second.config_hash
    assert first.config_hash != other.config_hash


def test_artifacts_inside_tuples_never_reach_renderer():
    result = assemble_documentation(
        pkgs={"xs": (Artifact("pkgs.a"), Artifact())},
        version="23.11",
        renderer=OptionsRenderer(),
    )

    assert result.scrubbed["pkgs"] == {"xs": ("${pkgs.a}", "${pkgs.xs[1]}")}
    assert "${pkgs.a}" in result.manual.text


def test_path_module_sources_are_hashed_as_strings():
    with_paths = assemble_documentation(
        pkgs={},
        version="23.11",
        user_config={"documentation": {"nixos": {"extraModuleSources": [Path("/etc/mods")]}}},
    )
    with_strings = assemble_documentation(
        pkgs={},
        version="23.11",
        user_config={"documentation": {"nixos": {"extraModuleSources": ["/etc/mods"]}}},
    )

    assert with_paths.directives.extra_module_sources == ("/etc/mods",)
    assert with_paths.config_hash == with_strings.config_hash


def test_unencodable_config_value_is_logged_structural_error():
    ctx = AssemblyContext()

    with pytest.raises(StructuralError):
        assemble_documentation(pkgs={}, version="23.11", user_config={"custom": object()}, ctx=ctx)

    failure = ctx.events_for("assembly")[-1]
    assert failure["level"] == "ERROR"
    assert failure["error"]["type"] == "CONFIG_STRUCTURAL_ERROR"
    assert failure["error"]["details"] == {"path": "config"}


def test_option_examples_are_scrubbed(documentation_registry):
    documentation_registry.declare(
        "services.site.modules",
        type=OptionType.LIST,
        default=[],
        description="Site modules.",
        example=[Artifact("pkgs.customModules")],
    )
    renderer = RecordingRenderer()

    assemble_documentation(pkgs={}, version="23.11", registry=documentation_registry, renderer=renderer)

    (request,) = renderer.requests
    options = {spec.path: spec for spec in request.options}
    assert options["services.site.modules"].example == ["${pkgs.customModules}"]
    assert options["documentation.nixos.extraModuleSources"].example == "[ pkgs.customModules ]"
