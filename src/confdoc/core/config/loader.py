# src/confdoc/core/config/loader.py
"""
Loader canônico de árvores de configuração e de fragmentos do confdoc.

Este módulo é responsável por carregar, a partir do disco, as entradas
declarativas do confdoc:
    - árvores de configuração (configuração do usuário, árvore de pacotes)
    - arquivos de fragmentos condicionais

Formatos suportados (v1):
    - YAML (.yaml, .yml) — artefatos via tag `!artifact <nome>`
    - JSON (.json)       — artefatos via objeto `{"$artifact": "<nome>"}`

Formato de um arquivo de fragmentos:

    fragments:
      - name: man
        when: documentation.man.enable          # ou lista; "!" nega
        payload:
          environment:
            pathsToLink: ["/share/man"]
        assertions:
          - forbid: [a.enable, b.enable]
            message: "a e b não podem ser usados ao mesmo tempo"
          - require: c.enable
            message: "c precisa estar habilitado"

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros estruturais são tratados como falhas fatais
    - A mesma entrada sempre produz a mesma árvore

Limites explícitos:
    - Não realiza merge nem composição
    - Não valida semântica de domínio
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Union
import json

import yaml  # PyYAML

from ..tree import Artifact
from ..compose.fragment import (
    Assertion,
    Fragment,
    all_of,
    disabled,
    enabled,
    forbid_all,
    require,
)
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    InvalidFragmentError,
    UnsupportedConfigFormatError,
)

ARTIFACT_TAG = "!artifact"
ARTIFACT_JSON_KEY = "$artifact"

PathLike = Union[str, Path]


class _TreeLoader(yaml.SafeLoader):
    """SafeLoader com suporte à tag `!artifact`."""


def _construct_artifact(loader: yaml.SafeLoader, node: yaml.Node) -> Artifact:
    name = loader.construct_scalar(node)
    return Artifact(name=str(name) if name else None)


_TreeLoader.add_constructor(ARTIFACT_TAG, _construct_artifact)


def _json_object_hook(obj: Dict[str, Any]) -> Any:
    if set(obj) == {ARTIFACT_JSON_KEY}:
        name = obj[ARTIFACT_JSON_KEY]
        return Artifact(name=str(name) if name else None)
    return obj


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML/JSON e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=_TreeLoader)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f, object_hook=_json_object_hook)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_tree(path: PathLike) -> Dict[str, Any]:
    """
    Carrega uma árvore de configuração (ou de pacotes) a partir do disco.

    Args:
        path (str | Path): Caminho do arquivo YAML ou JSON.

    Returns:
        Dict[str, Any]: Árvore carregada; artefatos declarados viram `Artifact`.
    """
    return _load_file(Path(path))


def _parse_literal(literal: Any, where: str) -> Callable[..., bool]:
    if not isinstance(literal, str) or not literal.strip("! "):
        raise InvalidFragmentError(f"{where}: predicado deve ser um caminho pontuado, recebido {literal!r}")
    literal = literal.strip()
    if literal.startswith("!"):
        return disabled(literal[1:].strip())
    return enabled(literal)


def _parse_when(raw: Any, where: str) -> Any:
    if raw is None or isinstance(raw, bool):
        return True if raw is None else raw
    if isinstance(raw, str):
        return _parse_literal(raw, where)
    if isinstance(raw, list) and raw:
        return all_of(*[_parse_literal(item, where) for item in raw])
    raise InvalidFragmentError(f"{where}: 'when' inválido: {raw!r}")


def _parse_assertion(raw: Any, where: str) -> Assertion:
    if not isinstance(raw, dict):
        raise InvalidFragmentError(f"{where}: asserção deve ser um mapa")

    message = raw.get("message")
    if not isinstance(message, str) or not message.strip():
        raise InvalidFragmentError(f"{where}: asserção sem 'message'")
    message = message.strip()

    if "forbid" in raw:
        paths = raw["forbid"]
        if not isinstance(paths, list) or not paths or not all(isinstance(p, str) for p in paths):
            raise InvalidFragmentError(f"{where}: 'forbid' deve ser lista de caminhos")
        return forbid_all(paths, message)

    if "require" in raw:
        path = raw["require"]
        if not isinstance(path, str):
            raise InvalidFragmentError(f"{where}: 'require' deve ser um caminho")
        return require(path, message)

    raise InvalidFragmentError(f"{where}: asserção precisa de 'forbid' ou 'require'")


def load_fragments(path: PathLike) -> List[Fragment]:
    """
    Carrega uma sequência ordenada de fragmentos declarativos.

    A ordem do arquivo é a ordem de declaração usada pelo composer.

    Raises:
        InvalidFragmentError: Se algum fragmento estiver malformado.
        (demais exceções de `load_tree`)
    """
    data = _load_file(Path(path))
    items = data.get("fragments")
    if not isinstance(items, list):
        raise InvalidFragmentError(f"{path}: chave 'fragments' deve ser uma lista")

    fragments: List[Fragment] = []
    for index, item in enumerate(items):
        where = f"{path}: fragments[{index}]"
        if not isinstance(item, dict):
            raise InvalidFragmentError(f"{where}: fragmento deve ser um mapa")

        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidFragmentError(f"{where}: 'name' obrigatório")

        payload = item.get("payload", {}) or {}
        if not isinstance(payload, dict):
            raise InvalidFragmentError(f"{where}: 'payload' deve ser um mapa")

        raw_assertions = item.get("assertions", []) or []
        if not isinstance(raw_assertions, list):
            raise InvalidFragmentError(f"{where}: 'assertions' deve ser uma lista")

        fragments.append(
            Fragment(
                name=name.strip(),
                payload=payload,
                when=_parse_when(item.get("when"), where),
                assertions=tuple(_parse_assertion(a, where) for a in raw_assertions),
            )
        )

    return fragments
