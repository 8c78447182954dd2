# src/cwagent_translator/core/config/errors.py
"""
Exceções canônicas da camada de configuração do tradutor.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento de fragmentos de configuração do agente.

Importante:
    Conflitos estruturais durante o merge NÃO são exceções. A política
    de merge é "a fonte mais recente vence" e conflitos de tipo são
    registrados apenas como warnings no `TranslationContext`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção deste módulo é levantada pelo merge

Limites explícitos:
    - Não representa erros de derivação de declarações
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração bruta do agente.

    Todas as exceções levantadas durante o carregamento e a validação
    estrutural mínima de fragmentos devem herdar desta classe.
    """


class FragmentNotFoundError(ConfigError):
    """
    Exceção levantada quando um fragmento de configuração não é
    encontrado no caminho especificado.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do fragmento não é suportado.

    Formatos suportados:
        - JSON (.json)
        - YAML (.yaml, .yml)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de um fragmento
    não é um dicionário (`dict`).

    Decisões arquiteturais:
        - Todo fragmento é um mapa chave-valor no nível raiz
        - Listas ou valores escalares no root são inválidos
    """
