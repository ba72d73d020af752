"""
Pipeline Functions - runtime XPath extension functions for lxml.
"""

__version__ = "1.0.0"

from .errors import DecoderLoadError
from .errors import FunctionArgumentError
from .errors import FunctionArityError
from .errors import FunctionResultError
from .errors import FunctionValidationError
from .errors import PipelineFunctionError
from .evaluator import CompiledExpression
from .evaluator import XPathEvaluator
from .functions import DecodeResourceURI
from .functions import FoldedFunction
from .functions import SystemFunction
from .functions import string_value
from .interfaces import RuntimeFunction
from .interfaces import URIDecoder
from .loader import CallableDecoder
from .loader import load_decoder
from .models import FunctionsConfig
from .models import FunctionSignature
from .models import StaticContext
from .registry import FunctionRegistry
from .registry import create_registry
from .validation import FunctionValidator
from .validation import ValidationCheck
from .validation import ValidationResult

__all__ = [
    "DecodeResourceURI",
    "SystemFunction",
    "FoldedFunction",
    "string_value",
    "RuntimeFunction",
    "URIDecoder",
    "FunctionRegistry",
    "create_registry",
    "XPathEvaluator",
    "CompiledExpression",
    "FunctionSignature",
    "FunctionsConfig",
    "StaticContext",
    "CallableDecoder",
    "load_decoder",
    "FunctionValidator",
    "ValidationCheck",
    "ValidationResult",
    # Error taxonomy
    "PipelineFunctionError",
    "FunctionArityError",
    "FunctionArgumentError",
    "FunctionResultError",
    "FunctionValidationError",
    "DecoderLoadError",
]
