# src/confdoc/core/assembly/adapter.py
"""
Adapter de montagem da documentação do confdoc.

Este módulo orquestra um passo completo de geração de documentação:

    1. Migrar opções renomeadas na configuração do usuário
    2. Resolver as configurações (defaults do schema + usuário)
    3. Compor os fragmentos de documentação (e extras do chamador)
    4. Sanitizar a árvore completa (pacotes + configuração) e os defaults
       e exemplos das opções, substituindo artefatos por placeholders
    5. Derivar diretivas de instalação
    6. Entregar a árvore sanitizada ao renderizador externo do manual

Decisões arquiteturais:
    - Todas as entradas são passadas explicitamente (sem estado global)
    - Erros de composição e estruturais são registrados no contexto e
      propagados ao chamador, sem recuperação
    - O renderizador nunca recebe um artefato, apenas placeholders

Invariantes:
    - Ou um AssemblyResult completo é produzido, ou uma exceção é levantada
    - A árvore entregue ao renderizador não contém artefatos

Limites explícitos:
    - Não renderiza (delegado ao `ManualRenderer`)
    - Não instala arquivos
    - Não decide como erros são exibidos ao usuário final
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Sequence, Tuple

from ..compose import Fragment, ResolvedConfig, compose, resolve_settings
from ..config.errors import CompositionError, StructuralError
from ..config.hashing import compute_config_hash
from ..context import AssemblyContext
from ..documentation import ManualArtifacts, documentation_fragments
from ..options import OptionRegistry, OptionSpec, build_documentation_registry
from ..scrub import iter_placeholders, scrub
from ..tree import is_artifact as default_is_artifact
from .directives import InstallDirectives, derive_directives

PKGS_PREFIX = "pkgs"


@dataclass(frozen=True)
class ManualRequest:
    """
    Entrada entregue ao renderizador externo do manual.

    Campos:
        - tree: árvore sanitizada `{"pkgs": ..., "config": ...}`
        - options: OptionSpec com defaults e exemplos sanitizados
        - version / revision: identificação da versão documentada
        - extra_sources: caminhos extras de módulos a remover das opções
        - include_all_modules: documentar opções de todos os módulos importados
    """
    tree: Dict[str, Any]
    options: Tuple[OptionSpec, ...]
    version: str
    revision: str
    extra_sources: Tuple[str, ...] = ()
    include_all_modules: bool = False


class ManualRenderer(Protocol):
    def render(self, request: ManualRequest) -> Any:
        ...


@dataclass(frozen=True)
class AssemblyResult:
    """Resultado agregado de uma montagem de documentação."""
    resolved: ResolvedConfig
    scrubbed: Dict[str, Any]
    directives: InstallDirectives
    config_hash: str
    manual: Any = None


def _scrub_options(
    registry: OptionRegistry,
    is_artifact: Callable[[Any], bool],
) -> Tuple[OptionSpec, ...]:
    return tuple(
        replace(
            spec,
            default=scrub(spec.default, is_artifact, prefix=spec.path),
            example=scrub(spec.example, is_artifact, prefix=f"{spec.path}.example"),
        )
        for spec in registry
    )


def assemble_documentation(
    *,
    pkgs: Mapping[str, Any],
    user_config: Optional[Mapping[str, Any]] = None,
    version: str,
    registry: Optional[OptionRegistry] = None,
    renderer: Optional[ManualRenderer] = None,
    ctx: Optional[AssemblyContext] = None,
    extra_fragments: Sequence[Fragment] = (),
    manual: ManualArtifacts = ManualArtifacts(),
    is_artifact: Callable[[Any], bool] = default_is_artifact,
) -> AssemblyResult:
    """
    Executa um passo completo de montagem da documentação.

    Args:
        pkgs (Mapping): Árvore de pacotes (com artefatos) do sistema de build.
        user_config (Optional[Mapping]): Configuração explícita do usuário.
        version (str): Versão do sistema documentado.
        registry (Optional[OptionRegistry]): Schema; padrão é o de documentação.
        renderer (Optional[ManualRenderer]): Renderizador externo do manual.
        ctx (Optional[AssemblyContext]): Contexto para eventos estruturados.
        extra_fragments (Sequence[Fragment]): Fragmentos adicionais, compostos
            depois dos fragmentos de documentação.
        manual (ManualArtifacts): Artefatos do manual referenciados.
        is_artifact (Callable): Predicado de artefato.

    Returns:
        AssemblyResult: Configuração resolvida, árvore sanitizada, diretivas,
        hash da configuração sanitizada e saída do renderizador (se chamado).

    Raises:
        CompositionError: Se alguma asserção de fragmento ativo falhar.
        StructuralError: Se alguma árvore de entrada for inválida ou se a
            configuração sanitizada não tiver forma canônica para o hash.
    """
    ctx = ctx if ctx is not None else AssemblyContext()
    registry = registry if registry is not None else build_documentation_registry()

    user_tree, rename_warnings = registry.apply_renames(user_config or {})
    for message in rename_warnings:
        ctx.add_warning(stage="options", message=message)

    try:
        settings = resolve_settings(registry.defaults_tree(), user_tree)
        fragments = tuple(documentation_fragments(settings, manual)) + tuple(extra_fragments)

        ctx.log(stage="compose", level="INFO", message="composition started", fragments=len(fragments))
        resolved = compose(settings, fragments)
        ctx.log(
            stage="compose",
            level="INFO",
            message="composition succeeded",
            active=list(resolved.active_fragments),
            inactive=list(resolved.inactive_fragments),
        )

        scrubbed = {
            PKGS_PREFIX: scrub(pkgs, is_artifact, prefix=PKGS_PREFIX),
            "config": scrub(resolved.to_dict(), is_artifact),
        }
        options = _scrub_options(registry, is_artifact)

        try:
            config_hash = compute_config_hash(scrubbed["config"])
        except TypeError as exc:
            raise StructuralError(f"Configuração sem forma canônica: {exc}", path="config") from exc
    except CompositionError as exc:
        ctx.log(stage="compose", level="ERROR", message="composition failed", error=exc.to_payload().to_dict())
        raise
    except StructuralError as exc:
        ctx.log(stage="assembly", level="ERROR", message="invalid tree", error=exc.to_payload().to_dict())
        raise

    ctx.log(
        stage="scrub",
        level="INFO",
        message="tree scrubbed",
        placeholders=sum(1 for _ in iter_placeholders(scrubbed)),
    )

    directives = derive_directives(resolved)

    output = None
    if directives.install_nixos_manual and renderer is not None:
        request = ManualRequest(
            tree=scrubbed,
            options=options,
            version=version,
            revision=f"release-{version}",
            extra_sources=directives.extra_module_sources,
            include_all_modules=resolved.enabled("documentation.nixos.includeAllModules"),
        )
        ctx.log(stage="render", level="INFO", message="manual renderer invoked", revision=request.revision)
        output = renderer.render(request)
    else:
        ctx.log(stage="render", level="INFO", message="manual rendering skipped")

    return AssemblyResult(
        resolved=resolved,
        scrubbed=scrubbed,
        directives=directives,
        config_hash=config_hash,
        manual=output,
    )
