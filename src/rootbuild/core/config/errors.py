# src/rootbuild/core/config/errors.py
"""
Exceções canônicas da camada de configuração do rootbuild.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento e a resolução do arquivo de descriptor (e do settings do
build).

As exceções aqui definidas representam violações estruturais do arquivo
de configuração, e não falhas de aplicação do descriptor. O descriptor e
o engine convertem qualquer `ConfigError` em `ConfigurationError` antes de
expor a falha ao usuário.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de deleção ou de task

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine, descriptor ou CLI
"""


class ConfigError(Exception):
    """
    Exceção base para erros do arquivo de configuração do rootbuild.

    Permite captura genérica de falhas de load e merge, distinguindo-as
    das falhas de aplicação do descriptor.
    """


class DescriptorNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de descriptor (ou settings) não
    existe no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar o arquivo automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo não é um `dict`.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"subprojects": {"evaluation_depends_on": ":app"}}
        - override: {"subprojects": [":app"]}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
