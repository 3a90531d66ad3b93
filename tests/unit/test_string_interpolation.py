from fnlocal.UTILS.string_interpolation import EnvironmentInterpolator

def test_braced_and_bare():
    context = {'REGISTRY': 'ghcr.io/alexellis', 'TAG': '1.0'}
    result = EnvironmentInterpolator.interpolate("image: ${REGISTRY}/fn:$TAG", context)
    assert result == "image: ghcr.io/alexellis/fn:1.0"

def test_default():
    assert EnvironmentInterpolator.interpolate("${TAG:-latest}", {}) == "latest"
    assert EnvironmentInterpolator.interpolate("${TAG:-latest}", {'TAG': ''}) == "latest"
    assert EnvironmentInterpolator.interpolate("${TAG:-latest}", {'TAG': 'dev'}) == "dev"

def test_alternative():
    assert EnvironmentInterpolator.interpolate("${CI:+true}", {'CI': '1'}) == "true"
    assert EnvironmentInterpolator.interpolate("${CI:+true}", {}) == ""

def test_unset_expands_to_empty():
    assert EnvironmentInterpolator.interpolate("a${MISSING}b$ALSO_MISSING", {}) == "ab"

def test_plain_text_untouched():
    text = "fprocess: sha512sum\nprice: 5$"
    assert EnvironmentInterpolator.interpolate(text, {}) == text
