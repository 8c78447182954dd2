# src/cwagent_translator/core/config/loader.py
"""
Loader de fragmentos de configuração do agente.

O agente aceita sua configuração dividida em vários fragmentos (por
exemplo, um arquivo principal e arquivos adicionais em um diretório
`config.d`). Este módulo apenas lê esses fragmentos do disco e valida
seu formato mínimo; a combinação deles é responsabilidade do merge
hierárquico (`core.merge`), executado pelo `TranslationEngine`.

Formatos suportados:
    - JSON (.json)
    - YAML (.yaml, .yml)

Invariantes:
    - Cada fragmento retornado é um dicionário puro (`dict`)
    - Arquivos vazios são interpretados como dicionários vazios
    - A ordem dos fragmentos é a ordem de precedência (último vence)

Limites explícitos:
    - Não realiza merge
    - Não valida semântica de domínio
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Union
import json

import yaml  # PyYAML

from .errors import (
    FragmentNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


PathLike = Union[str, Path]

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def load_fragment(path: PathLike) -> Dict[str, Any]:
    """
    Carrega um fragmento de configuração e valida sua estrutura básica.

    Args:
        path (PathLike): Caminho para o fragmento.

    Returns:
        Dict[str, Any]: Conteúdo do fragmento.

    Raises:
        FragmentNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)
    if not path.exists():
        raise FragmentNotFoundError(f"Fragmento de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            text = f.read()
        data = json.loads(text) if text.strip() else None

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Fragmento deve ter dict na raiz, recebido: {type(data).__name__} ({path})"
        )

    return data


def load_fragments(paths: Iterable[PathLike]) -> List[Dict[str, Any]]:
    """Carrega fragmentos na ordem fornecida (ordem de precedência)."""
    return [load_fragment(p) for p in paths]


def load_fragment_dir(directory: PathLike) -> List[Dict[str, Any]]:
    """
    Carrega todos os fragmentos suportados de um diretório.

    Os arquivos são ordenados por nome, de modo que a precedência
    seja estável entre execuções. Arquivos com extensões não
    suportadas são ignorados.

    Raises:
        FragmentNotFoundError: Se o diretório não existir.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FragmentNotFoundError(f"Diretório de fragmentos não encontrado: {directory}")

    files = sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
    )
    return load_fragments(files)
