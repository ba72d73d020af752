"""
Tests for function validation.

Checks that objects are recognised as satisfying, or failing, the
RuntimeFunction contract.
"""

from pipeline_functions import DecodeResourceURI
from pipeline_functions import FunctionSignature
from pipeline_functions import FunctionValidator
from pipeline_functions import SystemFunction
from pipeline_functions import ValidationCheck
from pipeline_functions import ValidationResult
from pipeline_functions.testing import MockFunction
from pipeline_functions.testing import StubDecoder


def _check(result: ValidationResult, name: str) -> ValidationCheck:
    return next(c for c in result.checks if c.name == name)


class TestValidationResult:
    def test_passed_ignores_warnings(self):
        result = ValidationResult(target="f")
        result.record("a", True, "ok", "info")
        result.record("b", False, "meh", "warning")

        assert result.passed is True
        assert len(result.warnings) == 1
        assert result.errors == []

    def test_failed_error(self):
        result = ValidationResult(target="f")
        result.record("a", False, "bad")

        assert result.passed is False
        assert result.format_errors() == "a: bad"

    def test_summary(self):
        result = ValidationResult(target="f")
        result.record("a", True, "ok", "info")
        result.record("b", False, "bad")
        result.record("c", False, "hm", "warning")

        assert result.summary() == "FAILED f: 1 error(s), 1 warning(s)"

    def test_default_severity_is_error(self):
        assert ValidationCheck("a", False, "bad").severity == "error"


class TestFunctionValidator:
    def test_decode_resource_uri_instance(self):
        result = FunctionValidator().validate(DecodeResourceURI(StubDecoder()))

        assert result.passed
        assert result.warnings == []
        assert "decode-resource-uri" in _check(result, "has_signature").message

    def test_decode_resource_uri_class(self):
        assert FunctionValidator().validate(DecodeResourceURI).passed

    def test_mock_function(self):
        assert FunctionValidator().validate(MockFunction()).passed

    def test_missing_signature(self):
        class Bare:
            def pre_evaluate(self, static_context):
                return self

            def evaluate(self, context, *arguments):
                return ""

        result = FunctionValidator().validate(Bare())

        assert not result.passed
        assert _check(result, "has_signature").passed is False

    def test_signature_of_wrong_type(self):
        class DictSignature:
            signature = {"name": "f"}

        result = FunctionValidator().validate(DictSignature())

        assert not result.passed
        assert "FunctionSignature" in _check(result, "has_signature").message

    def test_evaluate_without_context_parameter(self):
        class NoContext(SystemFunction):
            signature = FunctionSignature(name="f", description="f")

            def evaluate(self):
                return ""

        result = FunctionValidator().validate(NoContext())

        assert not result.passed
        assert _check(result, "evaluate_signature").passed is False

    def test_missing_description_is_warning(self):
        class Undocumented(SystemFunction):
            signature = FunctionSignature(name="f")

            def evaluate(self, context, *arguments):
                return ""

        result = FunctionValidator().validate(Undocumented())

        assert result.passed
        assert [c.name for c in result.warnings] == ["has_description"]
