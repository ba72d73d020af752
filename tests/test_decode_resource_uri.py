"""
Tests for the decode-resource-uri function called directly, without lxml.
"""

import pytest
from lxml import etree
from pipeline_functions import DecodeResourceURI
from pipeline_functions import FunctionArgumentError
from pipeline_functions import FunctionArityError
from pipeline_functions import FunctionResultError
from pipeline_functions import RuntimeFunction
from pipeline_functions import StaticContext
from pipeline_functions.testing import FailingDecoder
from pipeline_functions.testing import RecordingDecoder
from pipeline_functions.testing import StubDecoder


@pytest.fixture
def function():
    return DecodeResourceURI(
        RecordingDecoder(StubDecoder({"/1.0/css/a.css": "/css/a.css"}))
    )


class TestStaticEvaluation:
    def test_pre_evaluate_returns_function_itself(self, function):
        static_context = StaticContext(expression="p:decode-resource-uri('/x')")
        assert function.pre_evaluate(static_context) is function

    def test_pre_evaluate_does_not_call_decoder(self, function):
        function.pre_evaluate(StaticContext(expression="p:decode-resource-uri('/x')"))
        assert function.decoder.call_count == 0


class TestEvaluate:
    def test_returns_decoder_result(self, function):
        assert function.evaluate(None, "/1.0/css/a.css") == "/css/a.css"

    def test_passes_uri_unchanged(self, function):
        function.evaluate(None, "../relative/path?q=1#frag")
        assert function.decoder.calls == ["../relative/path?q=1#frag"]

    def test_callable_like_lxml_extension(self, function):
        assert function(None, "/1.0/css/a.css") == "/css/a.css"

    def test_calls_decoder_every_time(self, function):
        function.evaluate(None, "/a")
        function.evaluate(None, "/a")
        assert function.decoder.call_count == 2

    def test_result_is_plain_string(self, function):
        result = function.evaluate(None, "/1.0/css/a.css")
        assert type(result) is str

    def test_smart_string_argument(self, function):
        element = etree.fromstring('<link href="/1.0/css/a.css"/>')
        href = element.xpath("@href")[0]
        assert function.evaluate(None, href) == "/css/a.css"
        assert type(function.decoder.calls[0]) is str

    def test_single_attribute_node_set(self, function):
        element = etree.fromstring('<link href="/1.0/css/a.css"/>')
        assert function.evaluate(None, element.xpath("@href")) == "/css/a.css"

    def test_single_element_node_set_uses_string_value(self, function):
        element = etree.fromstring("<uri>/1.0/<b>css</b>/a.css</uri>")
        assert function.evaluate(None, [element]) == "/css/a.css"

    def test_satisfies_runtime_function_protocol(self, function):
        assert isinstance(function, RuntimeFunction)


class TestArgumentErrors:
    def test_no_arguments(self, function):
        with pytest.raises(FunctionArityError) as exc_info:
            function.evaluate(None)
        assert exc_info.value.expected == (1, 1)
        assert exc_info.value.received == 0
        assert function.decoder.call_count == 0

    def test_two_arguments(self, function):
        with pytest.raises(FunctionArityError):
            function.evaluate(None, "/a", "/b")

    @pytest.mark.parametrize("value", [42.0, 0, True, False, None])
    def test_non_string_argument(self, function, value):
        with pytest.raises(FunctionArgumentError):
            function.evaluate(None, value)
        assert function.decoder.call_count == 0

    def test_empty_node_set(self, function):
        with pytest.raises(FunctionArgumentError):
            function.evaluate(None, [])

    def test_multiple_node_set(self, function):
        with pytest.raises(FunctionArgumentError):
            function.evaluate(None, ["/a", "/b"])

    def test_argument_error_is_type_error(self, function):
        with pytest.raises(TypeError):
            function.evaluate(None, 1.5)


class TestDecoderFailures:
    def test_decoder_exception_propagates_unchanged(self):
        error = LookupError("no rewrite rule for /x")
        function = DecodeResourceURI(FailingDecoder(error))

        with pytest.raises(LookupError) as exc_info:
            function.evaluate(None, "/x")
        assert exc_info.value is error

    def test_non_string_decoder_result(self):
        class BytesDecoder:
            def decode_resource_uri(self, uri):
                return uri.encode()

        function = DecodeResourceURI(BytesDecoder())
        with pytest.raises(FunctionResultError):
            function.evaluate(None, "/x")
