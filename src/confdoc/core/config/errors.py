# src/confdoc/core/config/errors.py
"""
Exceções canônicas da camada de configuração do confdoc.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, o scrubbing, o merge e a composição de configuração.

As exceções aqui definidas representam **defeitos de entrada ou de
autoria de configuração**, e não condições transitórias: nenhuma delas
é re-tentada pelo core.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais e de composição são falhas fatais
    - Nenhum resultado parcial acompanha uma exceção

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - `CompositionError` sempre carrega todas as mensagens de falha

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não decide como o erro é reportado ao usuário final
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..errors import ErrorPayload, composition_failed, structural_error


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do confdoc.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas estruturais e falhas de composição
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de configuração ou de fragmentos
    não é encontrado no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar arquivos automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Invariantes:
        - O loader só opera sobre estruturas do tipo dicionário
    """


class InvalidFragmentError(ConfigError):
    """Declaração de fragmento malformada (nome, predicado, payload ou asserção)."""


class DuplicateOptionError(ConfigError):
    """Opção declarada mais de uma vez no mesmo registro."""


class OptionPathConflictError(ConfigError):
    """Caminho de opção é prefixo (ou extensão) de outra opção já declarada."""


class StructuralError(ConfigError):
    """
    Exceção levantada quando a árvore de entrada é estruturalmente inválida.

    Casos cobertos:
        - ciclo detectado (um nó alcançável a partir de si mesmo)
        - artefato incapaz de reportar identidade
        - raiz não-mapa onde um mapa é exigido (merge)

    Invariantes:
        - Nenhuma árvore parcial é produzida

    Limites explícitos:
        - Não tenta quebrar ciclos nem inventar nomes
    """

    def __init__(self, message: str, *, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def to_payload(self) -> ErrorPayload:
        return structural_error(message=self.message, path=self.path)


class CompositionError(ConfigError):
    """
    Exceção levantada quando uma ou mais asserções de fragmentos ativos falham.

    Carrega o conjunto completo de mensagens de falha, na ordem de
    declaração dos fragmentos, e não apenas a primeira.

    Exemplo:
        - fragmento "assertions" ativo com man-db e mandoc habilitados ao mesmo tempo

    Invariantes:
        - `messages` nunca é vazio
        - Nenhum ResolvedConfig é produzido quando esta exceção é levantada
    """

    def __init__(self, messages: Sequence[str], *, fragments: Sequence[str] = ()):
        self.messages: Tuple[str, ...] = tuple(messages)
        self.fragments: Tuple[str, ...] = tuple(fragments)
        if not self.messages:
            raise ValueError("CompositionError requires at least one message")
        super().__init__("; ".join(self.messages))

    def to_payload(self) -> ErrorPayload:
        return composition_failed(messages=self.messages, fragments=self.fragments)
