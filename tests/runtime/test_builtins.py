"""
Unit tests for the standard functions and meta-directives.
"""
import pytest

from recon_core.errors import HostError, InvalidFunction
from recon_core.evaluator import Evaluator
from recon_core.nodes import Number, Object, Record, String, Typed
from recon_core.parser import parse_source
from recon_core.runtime import build_state
from recon_core.runtime.config import InterpreterConfig
from recon_core.runtime.builtins import (
    ExpectedObject, InvalidData, InvalidEntry, InvalidUrl, VersionMismatch, number, std_url,
)


def run(source, state=None):
    return Evaluator(state or build_state()).evaluate(parse_source(source))


def host_cause(source, state=None):
    with pytest.raises(HostError) as exc_info:
        run(source, state)
    return exc_info.value.cause


class TestValueFunctions:
    """Tests for std_url and number."""

    def test_std_url_tags_string(self):
        assert std_url(String("localhost"), None) == Typed("std_url", String("localhost"))

    def test_std_url_rejects_non_string(self):
        with pytest.raises(InvalidUrl):
            std_url(Number(1), None)

    def test_number_parses_digits(self):
        assert number(String("42"), None) == Number(42)

    def test_number_passes_numbers_through(self):
        assert number(Number(3), None) == Number(3)

    def test_number_rejects_malformed_text(self):
        with pytest.raises(InvalidData):
            number(String("4x"), None)

    def test_in_document(self):
        result = run('home = @std_url "https://example.org"; port = @number "8080"')
        assert result == Object([
            Record("home", Typed("std_url", String("https://example.org"))),
            Record("port", Number(8080)),
        ])

    def test_failure_becomes_host_error(self):
        assert isinstance(host_cause("x = @std_url 5"), InvalidUrl)


class TestMetaLang:
    """Tests for the #meta-lang version pragma."""

    def test_matching_version_leaves_no_trace(self):
        assert run("#meta-lang 1.0\nx = 1") == Object([Record("x", Number(1))])

    def test_mismatch_fails_the_document(self):
        cause = host_cause("#meta-lang 2.0\nx = 1")
        assert isinstance(cause, VersionMismatch)
        assert str(cause) == "version mismatch: required 2, we are on 1"

    def test_configured_version(self):
        state = build_state(InterpreterConfig(version=1.1))
        assert run("#meta-lang 1.1", state) == Object([])

    def test_requires_float(self):
        assert isinstance(host_cause("#meta-lang 1"), InvalidData)


class TestMetaEval:
    """Tests for the #meta-eval directive."""

    def test_restricts_later_value_calls(self):
        with pytest.raises(InvalidFunction) as exc_info:
            run('#meta-eval { value = ["number"] }\nx = @number "1"\ny = @std_url "a"')
        assert exc_info.value.name == "std_url"

    def test_earlier_calls_unaffected(self):
        result = run('a = @std_url "a"\n#meta-eval { value = ["number"] }\nb = @number "2"')
        assert result == Object([
            Record("a", Typed("std_url", String("a"))),
            Record("b", Number(2)),
        ])

    def test_object_form(self):
        """Record ids of an object name the functions to keep."""
        state = build_state()
        result = run('#meta-eval {value = {std_url = @std_url "localhost"}}\nu = @std_url "x"', state)
        assert result == Object([Record("u", Typed("std_url", String("x")))])
        assert list(state.value_functions) == ["std_url"]

    def test_record_functions_can_be_disabled(self):
        with pytest.raises(InvalidFunction) as exc_info:
            run("#meta-eval { record = [] }\n#meta-lang 1.0")
        assert exc_info.value.name == "meta-lang"

    def test_can_reenable_from_library(self):
        source = (
            '#meta-eval { value = [] }\n'
            '#meta-eval { value = ["number"] }\n'
            'x = @number "5"'
        )
        assert run(source) == Object([Record("x", Number(5))])

    def test_unknown_name(self):
        with pytest.raises(InvalidFunction) as exc_info:
            run('#meta-eval { value = ["nope"] }')
        assert exc_info.value.name == "nope"

    def test_invalid_entry(self):
        assert isinstance(host_cause("#meta-eval { other = [] }"), InvalidEntry)

    def test_expects_object(self):
        assert isinstance(host_cause("#meta-eval 1"), ExpectedObject)

    def test_names_must_be_strings(self):
        assert isinstance(host_cause("#meta-eval { value = [1] }"), InvalidData)

    def test_state_change_outlives_document(self):
        state = build_state()
        run('#meta-eval { value = ["number"] }', state)
        with pytest.raises(InvalidFunction):
            run('x = @std_url "a"', state)
