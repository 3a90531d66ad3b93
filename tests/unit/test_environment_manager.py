from fnlocal.MODELS.function_definition import FunctionDefinition
from fnlocal.MANAGERS.environment_manager import EnvironmentManager

def test_layers_in_precedence_order(tmp_path):
    env_file = tmp_path / "env.yml"
    env_file.write_text("environment:\n  LEVEL: file\n  FROM_FILE: '1'\n")
    fn = FunctionDefinition(
        name="fn",
        image="fn:latest",
        environment={"LEVEL": "definition", "B": "2", "A": "1"},
        environment_file=[str(env_file)],
    )
    flags = EnvironmentManager().env_flags(fn, {"LEVEL": "extra"})
    assert flags == [
        "-e=A=1",
        "-e=B=2",
        "-e=LEVEL=definition",
        "-e=FROM_FILE=1",
        "-e=LEVEL=file",
        "-e=LEVEL=extra",
    ]

def test_keys_sorted_within_layer():
    fn = FunctionDefinition(name="fn", image="fn:latest")
    flags = EnvironmentManager().env_flags(fn, {"ZED": "1", "ALPHA": "2", "MID": "3"})
    assert flags == ["-e=ALPHA=2", "-e=MID=3", "-e=ZED=1"]

def test_values_kept_verbatim():
    fn = FunctionDefinition(name="fn", image="fn:latest", environment={"DSN": "a=b;c d"})
    assert EnvironmentManager().env_flags(fn, {}) == ["-e=DSN=a=b;c d"]
