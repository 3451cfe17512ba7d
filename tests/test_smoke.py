# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Build.

Garantem apenas que o pacote importa, que o registry padrão contém as tasks
embutidas e que a config empacotada resolve sem overrides.

Limites explícitos:
    - Não testar lógica de tasks
    - Não executar pipelines
"""


def test_smoke():
    import atlas_build
    from atlas_build.tasks import BUILTIN_TASKS, default_registry

    assert atlas_build.__version__
    assert default_registry().ids() == list(BUILTIN_TASKS)


def test_packaged_defaults_resolve():
    from atlas_build.core.config import load_config

    cfg = load_config()
    assert cfg["lib"] == "org.example/atlas-app"
    assert cfg["toolchain"]["home_env"] == "GRAALVM_HOME"
