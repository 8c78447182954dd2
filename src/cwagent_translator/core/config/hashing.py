# src/cwagent_translator/core/config/hashing.py
"""
Hashing canônico da configuração mesclada.

O hash representa a identidade estrutural da configuração canônica
produzida pelo merge e é registrado nos metadados da tradução para
rastreabilidade (duas traduções com o mesmo hash derivam o mesmo
`ExporterConfig`).

Política:
    - Chaves de mapeamentos são normalizadas para `str` (o YAML admite
      chaves inteiras, booleanas ou nulas, misturadas com strings)
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256
    - Valores não serializáveis em JSON (ex.: datas do YAML) usam `str`

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - Qualquer árvore aceita pelo merge pode ser hasheada
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""


import json
import hashlib
from typing import Dict, Any, Mapping


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração canônica.

    Args:
        config (Dict[str, Any]): Configuração mesclada.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _normalize_keys(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def _normalize_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _normalize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_keys(v) for v in value]
    return value
