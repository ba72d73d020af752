"""
XPath and XSLT evaluation with registered functions bound.

Each compiled expression gets its own binding from the registry, so static
evaluation decisions (and any folded results) live exactly as long as the
compiled expression.
"""

import logging
from typing import Any

from lxml import etree

from .models import StaticContext
from .registry import FunctionRegistry

logger = logging.getLogger(__name__)


class CompiledExpression:
    """An XPath expression compiled against a registry."""

    def __init__(self, expression: str, registry: FunctionRegistry):
        self.expression = expression
        self.static_context = StaticContext(
            expression=expression, namespaces=dict(registry.namespaces)
        )
        self.extensions = registry.bind(self.static_context)
        self._xpath = etree.XPath(
            expression,
            namespaces=self.static_context.namespaces,
            extensions=self.extensions,
        )

    def __call__(self, node: Any, **variables: Any) -> Any:
        """
        Evaluate against a document or element.

        Errors raised by bound functions propagate unchanged.
        """
        return self._xpath(node, **variables)

    def __repr__(self) -> str:
        return f"CompiledExpression({self.expression!r})"


class XPathEvaluator:
    """
    Compiles and evaluates XPath expressions with a registry's functions.

    Example:
        evaluator = XPathEvaluator(create_registry(decoder=decoder))
        evaluator.evaluate("p:decode-resource-uri(@href)", link)
    """

    def __init__(self, registry: FunctionRegistry):
        self.registry = registry

    def compile(self, expression: str) -> CompiledExpression:
        """
        Compile an expression.

        Raises:
            lxml.etree.XPathSyntaxError: Expression is not valid XPath
        """
        logger.debug(f"Compiling {expression!r}")
        return CompiledExpression(expression, self.registry)

    def evaluate(self, expression: str, node: Any, **variables: Any) -> Any:
        """Compile and evaluate in one step."""
        return self.compile(expression)(node, **variables)

    def compile_stylesheet(self, stylesheet: Any) -> etree.XSLT:
        """
        Compile an XSLT stylesheet with the registry's functions bound.

        Args:
            stylesheet: Parsed stylesheet document or root element
        """
        root = stylesheet.getroot() if hasattr(stylesheet, "getroot") else stylesheet
        static_context = StaticContext(
            expression=root.tag, namespaces={k: v for k, v in root.nsmap.items() if k}
        )
        return etree.XSLT(stylesheet, extensions=self.registry.bind(static_context))
