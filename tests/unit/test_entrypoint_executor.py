import pytest
from fnlocal.MODELS.function_definition import FunctionDefinition
from fnlocal.RUNNERS.entrypoint_executor import EntrypointExecutor
from fnlocal.errors import EntrypointError, BuildError

def write_template(root, lang, content):
    template_dir = root / lang
    template_dir.mkdir(parents=True)
    (template_dir / "template.yml").write_text(content)

def test_explicit_fprocess_wins(tmp_path):
    write_template(tmp_path, "python3", "language: python3\nfprocess: python3 index.py\n")
    fn = FunctionDefinition(name="fn", image="fn:latest", lang="python3", fprocess="cat")
    assert EntrypointExecutor(str(tmp_path)).derive_fprocess(fn) == "cat"

def test_fprocess_from_template(tmp_path):
    write_template(tmp_path, "python3", "language: python3\nfprocess: python3 index.py\n")
    fn = FunctionDefinition(name="fn", image="fn:latest", lang="python3")
    assert EntrypointExecutor(str(tmp_path)).derive_fprocess(fn) == "python3 index.py"

def test_missing_template(tmp_path):
    fn = FunctionDefinition(name="fn", image="fn:latest", lang="golang-http")
    with pytest.raises(EntrypointError) as excinfo:
        EntrypointExecutor(str(tmp_path)).derive_fprocess(fn)
    assert "golang-http" in str(excinfo.value)

def test_template_without_fprocess(tmp_path):
    write_template(tmp_path, "node18", "language: node18\n")
    fn = FunctionDefinition(name="fn", image="fn:latest", lang="node18")
    with pytest.raises(EntrypointError):
        EntrypointExecutor(str(tmp_path)).derive_fprocess(fn)

def test_broken_template(tmp_path):
    write_template(tmp_path, "ruby", "language: [ruby\n")
    fn = FunctionDefinition(name="fn", image="fn:latest", lang="ruby")
    with pytest.raises(BuildError):
        EntrypointExecutor(str(tmp_path)).derive_fprocess(fn)

def test_no_lang_and_no_fprocess(tmp_path):
    fn = FunctionDefinition(name="fn", image="fn:latest")
    with pytest.raises(EntrypointError):
        EntrypointExecutor(str(tmp_path)).derive_fprocess(fn)
