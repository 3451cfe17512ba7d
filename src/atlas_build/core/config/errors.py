"""
Exceções canônicas da camada de configuração do Atlas Build.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, o merge e a materialização da configuração de build
(`BuildConfig`).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Nenhuma exceção representa falha de task ou do toolkit

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`

Limites explícitos:
    - Não executa pipeline
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas Build.

    Permite captura genérica de falhas de configuração no CLI, separando-as
    das falhas de execução do pipeline (`BuildException`).
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Sem defaults não existe BuildConfig válida
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
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"toolchain": {"home_env": "GRAALVM_HOME"}}
        - override: {"toolchain": "graal"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidBuildConfigError(ConfigError):
    """
    Exceção levantada quando a configuração resolvida não pode ser
    materializada em uma `BuildConfig`.

    Exemplos:
        - `lib` fora do formato `group/artifact`
        - listas de diretórios vazias ou com valores não textuais
        - nomes de arquivo de artefato ausentes
    """
