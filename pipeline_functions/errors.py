"""Error taxonomy for pipeline functions.

Errors raised while calling a function (bad arity, bad argument type, bad
decoder result) are reported through these types. Failures raised by an
injected decoder are never translated: they reach the caller of the XPath
evaluation as the decoder raised them.
"""

from __future__ import annotations


class PipelineFunctionError(Exception):
    """Base for all pipeline function errors.

    Attributes:
        function: Qualified name of the function involved, if known.
    """

    def __init__(self, message: str, *, function: str | None = None) -> None:
        super().__init__(message)
        self.function = function

    def __repr__(self) -> str:
        parts = [repr(str(self))]
        if self.function is not None:
            parts.append(f"function={self.function!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class FunctionArityError(PipelineFunctionError):
    """Function called with the wrong number of arguments.

    Attributes:
        expected: ``(min, max)`` arity the function declares.
        received: Number of arguments actually passed.
    """

    def __init__(
        self,
        message: str,
        *,
        function: str | None = None,
        expected: tuple[int, int] | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message, function=function)
        self.expected = expected
        self.received = received


class FunctionArgumentError(PipelineFunctionError, TypeError):
    """Argument cannot be converted to the type the function declares."""


class FunctionResultError(PipelineFunctionError, TypeError):
    """Function (or its decoder) produced a value of the wrong type."""


class FunctionValidationError(PipelineFunctionError):
    """Object does not satisfy the runtime function contract."""


class DecoderLoadError(PipelineFunctionError):
    """Decoder reference cannot be resolved to a usable decoder."""
