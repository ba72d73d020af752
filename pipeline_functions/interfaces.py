"""
Standard interfaces for pipeline functions.
Uses Protocol classes for structural subtyping (no inheritance required).
"""

from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .models import FunctionSignature
from .models import StaticContext


@runtime_checkable
class RuntimeFunction(Protocol):
    """
    Interface the host requires of an XPath extension function.

    A function reports its static-evaluation behaviour when an expression is
    compiled, and evaluates to a value when the expression runs. Implementations
    may extend ``SystemFunction`` but only need to match this shape.
    """

    @property
    def signature(self) -> FunctionSignature:
        """Local name and arity the function is registered under."""
        ...

    def pre_evaluate(self, static_context: StaticContext) -> Any:
        """
        Report static-evaluation behaviour.

        Args:
            static_context: Compile-time context of the expression

        Returns:
            The function itself to require evaluation on every execution,
            or a replacement callable the host binds instead (for example a
            ``FoldedFunction`` that may reuse earlier results).
        """
        ...

    def evaluate(self, context: Any, *arguments: Any) -> Any:
        """
        Evaluate the function.

        Args:
            context: lxml extension function context
            *arguments: Argument values, already evaluated by the host

        Returns:
            An XPath value (string, number, boolean or node-set)
        """
        ...


@runtime_checkable
class URIDecoder(Protocol):
    """
    Interface for resource URI decoders.

    Decoders own the deployment-specific rewriting rules (base paths,
    versioned resource prefixes) and where those rules are configured.
    Functions only pass URIs through them.
    """

    def decode_resource_uri(self, uri: str) -> str:
        """
        Decode a resource URI.

        Args:
            uri: Resource URI as written in the expression, absolute or relative

        Returns:
            The decoded URI
        """
        ...
