# src/confdoc/__init__.py
"""
confdoc — composição declarativa de configuração de documentação.

Este pacote raiz define o namespace público do confdoc, uma biblioteca
para declarar opções de documentação, compor fragmentos condicionais de
configuração e produzir uma visão "segura para renderizar" de árvores de
configuração/pacotes muito maiores.

Princípios centrais:
    - A composição é uma dobra explícita de fragmentos em ordem de declaração
    - Artefatos de build nunca são avaliados para fins de documentação
    - Nenhum estado global: todas as entradas são passadas explicitamente
    - Erros de configuração são reportados em lote, nunca parcialmente

Arquitetura em alto nível:
    - core.tree          → variantes de nó (map / escalar / artefato) e placeholders
    - core.options       → registro de opções tipadas (schema)
    - core.scrub         → substituição recursiva de artefatos por placeholders
    - core.config        → merge, carregamento, erros e hashing de configuração
    - core.compose       → composição condicional de fragmentos
    - core.documentation → fragmentos canônicos do módulo de documentação
    - core.assembly      → orquestração (adapter) até o renderizador externo
    - render             → renderizador de referência (apresentação apenas)

Limites explícitos:
    - Não constrói nem avalia artefatos
    - Não decide layout de filesystem
    - Não define formato de saída do manual (responsabilidade do renderizador)
"""
# src/confdoc/__init__.py
from .core.assembly import AssemblyResult, assemble_documentation
from .core.compose import Fragment, ResolvedConfig, compose
from .core.scrub import scrub
from .core.tree import Artifact

__all__ = [
    "Artifact",
    "AssemblyResult",
    "Fragment",
    "ResolvedConfig",
    "assemble_documentation",
    "compose",
    "scrub",
]
