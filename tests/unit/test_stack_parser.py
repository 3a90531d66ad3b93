import yaml
import pytest
from fnlocal.PARSERS.stack_parser import StackParser
from fnlocal.errors import StackFileError

STACK = {
    'version': 1.0,
    'provider': {
        'name': 'openfaas',
        'gateway': 'http://127.0.0.1:8080',
    },
    'functions': {
        'stronghash': {
            'lang': 'dockerfile',
            'image': 'functions/alpine:latest',
            'fprocess': 'sha512sum',
            'environment': {'write_debug': True, 'max_inflight': 10},
            'limits': {'memory': '40Mi', 'cpu': '100m'},
        },
        'strongerhash': {
            'image': 'functions/alpine:latest',
            'fprocess': 'sha256sum',
            'secrets': ['token'],
            'environment_file': ['env.yml'],
            'readonly_root_filesystem': True,
        },
        'nodeinfo': {
            'lang': 'node18',
            'handler': './nodeinfo',
            'image': 'functions/nodeinfo:${TAG:-latest}',
        },
    },
}

def write_stack(tmp_path, content=STACK):
    stack_file = tmp_path / "stack.yml"
    with open(stack_file, 'w') as f:
        yaml.dump(content, f)
    return str(stack_file)

def test_parse(tmp_path):
    parser = StackParser(context={})
    stack = parser.parse(write_stack(tmp_path))

    assert stack.version == '1.0'
    assert stack.provider.gateway == 'http://127.0.0.1:8080'
    assert set(stack.functions) == {'stronghash', 'strongerhash', 'nodeinfo'}

    fn = stack.functions['stronghash']
    assert fn.name == 'stronghash'
    assert fn.fprocess == 'sha512sum'
    assert fn.environment == {'write_debug': 'true', 'max_inflight': '10'}
    assert fn.limits.memory == '40Mi'
    assert fn.limits.cpu == '100m'
    assert fn.secrets == []
    assert fn.readonly_root_filesystem is False

    other = stack.functions['strongerhash']
    assert other.secrets == ['token']
    assert other.environment_file == ['env.yml']
    assert other.readonly_root_filesystem is True
    assert other.limits is None

def test_parse_filter_exact(tmp_path):
    stack = StackParser(context={}).parse(write_stack(tmp_path), name_filter='stronghash')
    assert list(stack.functions) == ['stronghash']

def test_parse_filter_wildcard(tmp_path):
    stack = StackParser(context={}).parse(write_stack(tmp_path), name_filter='strong*')
    assert set(stack.functions) == {'stronghash', 'strongerhash'}

def test_parse_filter_no_match(tmp_path):
    with pytest.raises(StackFileError) as excinfo:
        StackParser(context={}).parse(write_stack(tmp_path), name_filter='missing')
    assert 'missing' in str(excinfo.value)

def test_envsubst(tmp_path):
    path = write_stack(tmp_path)
    assert StackParser(context={}).parse(path).functions['nodeinfo'].image == 'functions/nodeinfo:latest'
    assert StackParser(context={'TAG': '0.2'}).parse(path).functions['nodeinfo'].image == 'functions/nodeinfo:0.2'

def test_envsubst_disabled(tmp_path):
    stack = StackParser(context={'TAG': '0.2'}, envsubst=False).parse(write_stack(tmp_path))
    assert stack.functions['nodeinfo'].image == 'functions/nodeinfo:${TAG:-latest}'

def test_missing_file(tmp_path):
    with pytest.raises(StackFileError) as excinfo:
        StackParser().parse(str(tmp_path / "nope.yml"))
    assert 'nope.yml' in str(excinfo.value)

def test_function_without_image():
    content = "functions:\n  broken:\n    lang: python3\n"
    with pytest.raises(StackFileError) as excinfo:
        StackParser(context={}).parse_from_string(content)
    assert 'broken' in str(excinfo.value)

def test_invalid_yaml():
    with pytest.raises(StackFileError):
        StackParser(context={}).parse_from_string("functions: [oops\n")

def test_empty_stack():
    stack = StackParser(context={}).parse_from_string("")
    assert stack.functions == {}

def test_file_not_utf8(tmp_path):
    stack_file = tmp_path / "stack.yml"
    stack_file.write_bytes(b"functions:\n  fn:\n    image: fn:latest\n    fprocess: \xff\n")
    with pytest.raises(StackFileError) as excinfo:
        StackParser(context={}).parse(str(stack_file))
    assert str(stack_file) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
