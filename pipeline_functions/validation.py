"""
Function validation.

Checks that an object satisfies the ``RuntimeFunction`` contract before it is
registered: a ``FunctionSignature``, the protocol methods (via ``isinstance()``
against the runtime_checkable protocol) and an ``evaluate()`` that takes the
evaluation context positionally.
"""

import inspect
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Literal

from .interfaces import RuntimeFunction
from .models import FunctionSignature

Severity = Literal["error", "warning", "info"]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


@dataclass(frozen=True)
class ValidationCheck:
    name: str
    passed: bool
    message: str
    severity: Severity = "error"


@dataclass
class ValidationResult:
    """Checks run against one function; only failed errors fail the result."""

    target: str
    checks: list[ValidationCheck] = field(default_factory=list)

    def record(self, name: str, passed: bool, message: str, severity: Severity = "error") -> None:
        self.checks.append(ValidationCheck(name, passed, message, severity))

    def failures(self, severity: Severity) -> list[ValidationCheck]:
        return [c for c in self.checks if c.severity == severity and not c.passed]

    @property
    def errors(self) -> list[ValidationCheck]:
        return self.failures("error")

    @property
    def warnings(self) -> list[ValidationCheck]:
        return self.failures("warning")

    @property
    def passed(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        return f"{status} {self.target}: {len(self.errors)} error(s), {len(self.warnings)} warning(s)"

    def format_errors(self) -> str:
        return "; ".join(f"{c.name}: {c.message}" for c in self.errors)


class FunctionValidator:
    """Validates RuntimeFunction compliance."""

    def validate(self, function: Any) -> ValidationResult:
        result = ValidationResult(target=getattr(function, "__name__", None) or repr(function))

        signature = getattr(function, "signature", None)
        if not isinstance(signature, FunctionSignature):
            found = "none" if signature is None else type(signature).__name__
            result.record("has_signature", False, f"Expected a FunctionSignature 'signature', found {found}")
            return result
        result.record(
            "has_signature", True, f"'{signature.name}' takes {signature.arity} argument(s)", "info"
        )

        if isinstance(function, RuntimeFunction):
            result.record("implements_protocol", True, "Implements RuntimeFunction", "info")
        else:
            missing = [m for m in ("pre_evaluate", "evaluate") if not callable(getattr(function, m, None))]
            result.record("implements_protocol", False, f"Missing methods: {', '.join(missing)}")

        self._check_evaluate(result, getattr(function, "evaluate", None))

        result.record(
            "has_description",
            bool(signature.description),
            signature.description or "Signature has no description",
            "warning",
        )
        return result

    def _check_evaluate(self, result: ValidationResult, evaluate: Any) -> None:
        if not callable(evaluate):
            return
        try:
            params = inspect.signature(evaluate).parameters.values()
        except (TypeError, ValueError):
            result.record("evaluate_signature", False, "evaluate() signature not inspectable", "warning")
            return

        if any(p.kind in _POSITIONAL for p in params):
            result.record("evaluate_signature", True, "evaluate() takes a context", "info")
        else:
            result.record(
                "evaluate_signature", False, "evaluate() must take the evaluation context positionally"
            )
