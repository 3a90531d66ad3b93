import shlex
import pytest
from pydantic import ValidationError
from fnlocal.MODELS.function_definition import FunctionDefinition
from fnlocal.MODELS.invocation import Invocation
from fnlocal.MODELS.run_options import RunOptions
from fnlocal.settings import LocalRunSettings

def test_function_requires_image():
    with pytest.raises(ValidationError):
        FunctionDefinition(name="fn", image="")

def test_function_coerces_yaml_scalars():
    fn = FunctionDefinition.model_validate({
        'image': 'fn:latest',
        'environment': {'DEBUG': True, 'RETRIES': 3, 'EMPTY': None},
        'limits': {'memory': None, 'cpu': 1},
        'secrets': None,
        'environment_file': 'env.yml',
    })
    assert fn.environment == {'DEBUG': 'true', 'RETRIES': '3', 'EMPTY': ''}
    assert fn.limits.memory == ''
    assert fn.limits.cpu == '1'
    assert fn.secrets == []
    assert fn.environment_file == ['env.yml']

def test_run_options_defaults():
    options = RunOptions()
    assert options.print_only is False
    assert options.port == 8080
    assert options.network == ''
    assert options.extra_env == {}

def test_run_options_frozen():
    options = RunOptions()
    with pytest.raises(ValidationError):
        options.port = 9000

def test_run_options_rejects_bad_port():
    with pytest.raises(ValidationError):
        RunOptions(port=70000)

def test_invocation_str():
    inv = Invocation(image="fn:latest", args=["run", "--rm", "-e=fprocess=python3 index.py"])
    assert str(inv) == "docker run --rm '-e=fprocess=python3 index.py' fn:latest"
    assert shlex.split(str(inv)) == inv.command
    assert inv.flags == ["--rm", "-e=fprocess=python3 index.py"]

@pytest.mark.parametrize("value, expected", [
    (None, False),
    ("0", False),
    ("1", True),
    ("true", True),
    ("", True),
])
def test_experimental_flag(value, expected):
    environ = {} if value is None else {'OPENFAAS_EXPERIMENTAL': value}
    assert LocalRunSettings.from_env(environ).experimental is expected

def test_template_dir_from_env():
    assert LocalRunSettings.from_env({}).template_dir == './template'
    assert LocalRunSettings.from_env({'OPENFAAS_TEMPLATE_DIR': '/tmp/t'}).template_dir == '/tmp/t'
