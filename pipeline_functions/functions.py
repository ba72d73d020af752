"""
Runtime functions callable from XPath and XSLT.

``SystemFunction`` carries the bookkeeping every function shares: its
signature, arity checks and argument conversion. By default a system function
may be folded, meaning the host is free to reuse a result computed for the
same arguments. Functions whose value depends on runtime configuration
override ``pre_evaluate`` to return themselves.
"""

import logging
from typing import Any

from lxml import etree

from .errors import FunctionArgumentError
from .errors import FunctionArityError
from .errors import FunctionResultError
from .interfaces import URIDecoder
from .models import FunctionSignature
from .models import StaticContext

logger = logging.getLogger(__name__)


def string_value(value: Any, function: str | None = None) -> str:
    """
    Convert an evaluated XPath argument to a string.

    Accepts strings (including lxml smart strings) and node-sets holding
    exactly one item. Numbers and booleans are rejected rather than
    stringified.

    Raises:
        FunctionArgumentError: Value is not a string or a single-item node-set
    """
    if isinstance(value, str):
        return str(value)

    if isinstance(value, list):
        if len(value) != 1:
            raise FunctionArgumentError(
                f"Expected exactly one item, got a node-set of {len(value)}",
                function=function,
            )
        item = value[0]
        if isinstance(item, str):
            return str(item)
        if isinstance(item, etree._Element):
            return str(item.xpath("string()"))
        raise FunctionArgumentError(
            f"Cannot convert node-set item of type {type(item).__name__} to string",
            function=function,
        )

    raise FunctionArgumentError(
        f"Expected a string argument, got {type(value).__name__}",
        function=function,
    )


class SystemFunction:
    """Base class for functions registered with a ``FunctionRegistry``."""

    signature: FunctionSignature

    @property
    def name(self) -> str:
        return self.signature.name

    def check_arity(self, arguments: tuple) -> None:
        received = len(arguments)
        low, high = self.signature.min_arity, self.signature.max_arity
        if not low <= received <= high:
            raise FunctionArityError(
                f"{self.name}() takes {self.signature.arity} argument(s), {received} given",
                function=self.name,
                expected=(low, high),
                received=received,
            )

    def string_argument(self, arguments: tuple, index: int) -> str:
        return string_value(arguments[index], function=self.name)

    def pre_evaluate(self, static_context: StaticContext) -> Any:
        """Allow the host to fold calls; see ``FoldedFunction``."""
        return FoldedFunction(self)

    def evaluate(self, context: Any, *arguments: Any) -> Any:
        raise NotImplementedError

    def __call__(self, context: Any, *arguments: Any) -> Any:
        return self.evaluate(context, *arguments)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def _constant_key(arguments: tuple) -> tuple | None:
    """Value key for all-constant arguments, None if any is a node-set."""
    key = []
    for argument in arguments:
        if isinstance(argument, bool):
            key.append((bool, argument))
        elif isinstance(argument, float):
            key.append((float, argument))
        elif isinstance(argument, str):
            # plain str drops any reference back to the source document
            key.append((str, str(argument)))
        else:
            return None
    return tuple(key)


class FoldedFunction:
    """
    Binding for a function the host may fold.

    Calls whose arguments are all constants (strings, numbers, booleans) are
    evaluated once per distinct argument values and reused afterwards. Calls
    with a node-set argument depend on the document and always go straight
    through. A new instance is created for each compiled expression, so
    results never outlive it.
    """

    def __init__(self, function: SystemFunction):
        self.function = function
        self._results: dict[tuple, Any] = {}

    @property
    def signature(self) -> FunctionSignature:
        return self.function.signature

    def __call__(self, context: Any, *arguments: Any) -> Any:
        key = _constant_key(arguments)
        if key is None:
            return self.function.evaluate(context, *arguments)
        if key in self._results:
            return self._results[key]
        result = self.function.evaluate(context, *arguments)
        self._results[key] = result
        logger.debug(f"Folded {self.function.name}{key!r}")
        return result


class DecodeResourceURI(SystemFunction):
    """
    ``decode-resource-uri($uri as xs:string) as xs:string``

    Decodes a resource URI through the injected decoder each time the
    expression is evaluated. The decoded form depends on deployment
    configuration (base paths, versioned resource prefixes) that can change
    after the expression is compiled, so calls are never folded.
    """

    signature = FunctionSignature(
        name="decode-resource-uri",
        min_arity=1,
        max_arity=1,
        description="Decode a resource URI using the deployment's rewriting rules",
    )

    def __init__(self, decoder: URIDecoder):
        self.decoder = decoder

    def pre_evaluate(self, static_context: StaticContext) -> "DecodeResourceURI":
        return self

    def evaluate(self, context: Any, *arguments: Any) -> str:
        """
        Decode the single URI argument.

        Exceptions raised by the decoder propagate unchanged. The only check
        on the decoder's output is its type: lxml would turn a non-string
        into a different XPath value, so that raises instead.

        Raises:
            FunctionArityError: Not exactly one argument
            FunctionArgumentError: Argument is not a string
            FunctionResultError: Decoder returned something other than str
        """
        self.check_arity(arguments)
        uri = self.string_argument(arguments, 0)

        decoded = self.decoder.decode_resource_uri(uri)
        if not isinstance(decoded, str):
            raise FunctionResultError(
                f"Decoder returned {type(decoded).__name__}, expected str",
                function=self.name,
            )
        return decoded
