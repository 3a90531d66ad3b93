import io
import sys
from fnlocal.RUNNERS.process_runner import ProcessRunner
from fnlocal.BUILDERS.invocation_builder import InvocationBuilder
from fnlocal.MANAGERS.secrets_manager import SecretsManager
from fnlocal.MODELS.function_definition import FunctionDefinition
from fnlocal.MODELS.run_options import RunOptions

def test_command_injection_attempt(tmp_path):
    """
    ProcessRunner must not hand the command to a shell, so ';' stays a literal argument.
    """
    runner = ProcessRunner(name="test_injection")
    injected_file = tmp_path / "injected.txt"
    out = io.StringIO()
    command = [sys.executable, "-c", "import sys; print(sys.argv[1:])", ";", "touch", str(injected_file)]

    runner.start(command=command, stdout=out, stderr=io.StringIO())
    assert runner.wait() == 0

    assert not injected_file.exists(), "Command injection successful! Security vulnerability found."
    assert "';'" in out.getvalue()

def test_env_values_are_single_arguments(tmp_path):
    """
    Hostile environment values must end up as one argv entry each.
    """
    builder = InvocationBuilder(secrets_manager=SecretsManager(base_dir=str(tmp_path)))
    fn = FunctionDefinition(name="fn", image="fn:latest", fprocess="cat")
    inv = builder.build(fn, RunOptions(extra_env={"X": "1; rm -rf / #"}))
    assert "-e=X=1; rm -rf / #" in inv.command
