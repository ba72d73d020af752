"""
Testing utilities for pipeline functions.
Provides stub decoders and functions for exercising the registry and evaluator.
"""

from typing import Any

from .functions import SystemFunction
from .models import FunctionSignature


class StubDecoder:
    """Decoder that returns fixed results, or the URI unchanged when unmapped."""

    def __init__(self, results: dict[str, str] | None = None):
        self.results = results or {}

    def decode_resource_uri(self, uri: str) -> str:
        return self.results.get(uri, uri)


class RecordingDecoder:
    """Decoder that records every call and delegates to another decoder."""

    def __init__(self, inner: Any | None = None):
        self.inner = inner or StubDecoder()
        self.calls: list[str] = []

    def decode_resource_uri(self, uri: str) -> str:
        self.calls.append(uri)
        return self.inner.decode_resource_uri(uri)

    @property
    def call_count(self) -> int:
        return len(self.calls)


class DeploymentDecoder:
    """
    Decoder whose rules can be changed between evaluations.

    Strips ``version`` from versioned URIs, then prefixes ``base_path``. Both
    are plain attributes so tests can switch deployment configuration after an
    expression has been compiled.
    """

    def __init__(self, base_path: str = "", version: str | None = None):
        self.base_path = base_path
        self.version = version

    def decode_resource_uri(self, uri: str) -> str:
        if self.version:
            prefix = f"/{self.version}/"
            if uri.startswith(prefix):
                uri = uri[len(prefix) - 1 :]
        if uri.startswith("/"):
            return self.base_path.rstrip("/") + uri
        return uri


class FailingDecoder:
    """Decoder that raises the given exception on every call."""

    def __init__(self, error: BaseException):
        self.error = error

    def decode_resource_uri(self, uri: str) -> str:
        raise self.error


class MockFunction(SystemFunction):
    """
    Foldable one-argument function for testing static evaluation.

    Upper-cases its string argument and records the arguments of every
    evaluation.
    """

    signature = FunctionSignature(
        name="upper-case", min_arity=1, max_arity=1, description="Upper-case a string"
    )

    def __init__(self):
        self.calls: list[tuple] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def evaluate(self, context: Any, *arguments: Any) -> str:
        self.check_arity(arguments)
        self.calls.append(arguments)
        return self.string_argument(arguments, 0).upper()
