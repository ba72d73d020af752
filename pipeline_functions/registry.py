"""
Function registry - the host's function table.

Functions are registered under a fixed ``(namespace, local name)`` pair and
validated against the RuntimeFunction contract. When an expression is compiled,
``bind()`` asks every function for its static-evaluation behaviour and hands
lxml the resulting callables:

- a function whose ``pre_evaluate`` returns itself is bound live and runs on
  every evaluation
- anything else ``pre_evaluate`` returns is bound in its place (typically a
  ``FoldedFunction`` that may reuse earlier results)
"""

import contextlib
import logging
from collections.abc import Callable
from collections.abc import Iterator
from typing import Any

from lxml import etree

from .errors import DecoderLoadError
from .errors import FunctionValidationError
from .functions import DecodeResourceURI
from .interfaces import RuntimeFunction
from .interfaces import URIDecoder
from .loader import load_decoder
from .models import FunctionsConfig
from .models import FunctionSignature
from .models import StaticContext
from .validation import FunctionValidator

logger = logging.getLogger(__name__)


class FunctionRegistry:
    """
    Table of runtime functions keyed by namespace and local name.

    Example:
        registry = FunctionRegistry()
        registry.register(DecodeResourceURI(decoder))
        extensions = registry.bind(StaticContext(expression=expr))
        etree.XPath(expr, namespaces=registry.namespaces, extensions=extensions)
    """

    def __init__(self, config: FunctionsConfig | None = None):
        self.config = config or FunctionsConfig()
        self._functions: dict[tuple[str, str], RuntimeFunction] = {}
        self._validator = FunctionValidator()
        self._installed: dict[tuple[str, str], Callable] = {}

    @property
    def namespace(self) -> str:
        return self.config.namespace

    @property
    def namespaces(self) -> dict[str, str]:
        """Prefix bindings for compiled expressions."""
        return self.config.namespaces

    def register(
        self,
        function: RuntimeFunction,
        namespace: str | None = None,
        name: str | None = None,
    ) -> None:
        """
        Register a function.

        Args:
            function: Function implementing the RuntimeFunction contract
            namespace: Namespace URI (defaults to the registry's namespace)
            name: Local name (defaults to the function signature's name)

        Raises:
            FunctionValidationError: Function does not satisfy the contract
        """
        result = self._validator.validate(function)
        if not result.passed:
            raise FunctionValidationError(
                f"Cannot register {function!r}: {result.format_errors()}"
            )

        key = (namespace or self.namespace, name or function.signature.name)
        if key in self._functions:
            logger.warning(f"Replacing function {{{key[0]}}}{key[1]}")
        self._functions[key] = function
        logger.info(
            f"Registered {function.__class__.__name__} as {{{key[0]}}}{key[1]}"
        )

    def unregister(self, name: str, namespace: str | None = None) -> None:
        key = (namespace or self.namespace, name)
        if self._functions.pop(key, None) is not None:
            logger.info(f"Unregistered {{{key[0]}}}{key[1]}")

    def get(self, name: str, namespace: str | None = None) -> RuntimeFunction | None:
        return self._functions.get((namespace or self.namespace, name))

    def list_functions(self) -> list[FunctionSignature]:
        """Signatures of all registered functions, with their registered names."""
        return [
            function.signature.model_copy(update={"namespace": ns, "name": name})
            for (ns, name), function in sorted(self._functions.items())
        ]

    def bind(self, static_context: StaticContext) -> dict[tuple[str, str], Any]:
        """
        Produce the lxml ``extensions`` mapping for one compiled expression.

        Args:
            static_context: Compile-time context of the expression

        Returns:
            ``{(namespace, name): callable}`` suitable for ``etree.XPath`` and
            ``etree.XSLT``
        """
        extensions = {}
        for key, function in self._functions.items():
            bound = function.pre_evaluate(static_context)
            if bound is function:
                logger.debug(f"Binding {{{key[0]}}}{key[1]} for runtime evaluation")
            else:
                logger.debug(f"Binding {{{key[0]}}}{key[1]} as foldable")
            extensions[key] = bound
        return extensions

    def install(self) -> None:
        """
        Install functions into lxml's global function namespaces.

        Makes them visible to ``element.xpath()`` and XSLT stylesheets that
        are not given an explicit ``extensions`` mapping. Installed functions
        are bound live.
        """
        for (ns, name), function in self._functions.items():
            etree.FunctionNamespace(ns)[name] = function
            self._installed[(ns, name)] = function
            logger.debug(f"Installed {{{ns}}}{name} into lxml")

    def uninstall(self) -> None:
        """
        Remove functions previously added by ``install()``.

        A slot that now holds a different function (installed later by someone
        else) is left alone.
        """
        for (ns, name), function in list(self._installed.items()):
            function_namespace = etree.FunctionNamespace(ns)
            current = None
            with contextlib.suppress(KeyError):
                current = function_namespace[name]
            if current is function:
                del function_namespace[name]
                logger.debug(f"Uninstalled {{{ns}}}{name} from lxml")
            else:
                logger.debug(f"Leaving {{{ns}}}{name} installed by another owner")
            del self._installed[(ns, name)]

    def __contains__(self, name: str) -> bool:
        return (self.namespace, name) in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[RuntimeFunction]:
        return iter(self._functions.values())


def create_registry(
    config: FunctionsConfig | None = None,
    decoder: URIDecoder | None = None,
) -> FunctionRegistry:
    """
    Build a registry with the standard pipeline functions registered.

    Args:
        config: Registry configuration (defaults to ``FunctionsConfig.from_env()``)
        decoder: Decoder for ``decode-resource-uri``; loaded from
            ``config.decoder`` when omitted

    Raises:
        DecoderLoadError: No decoder given and none configured, or the
            configured one cannot be loaded
    """
    config = config or FunctionsConfig.from_env()
    if decoder is None:
        if not config.decoder:
            raise DecoderLoadError(
                "No decoder given and none configured (set PIPELINE_FUNCTIONS_DECODER)"
            )
        decoder = load_decoder(config.decoder)

    registry = FunctionRegistry(config)
    registry.register(DecodeResourceURI(decoder))
    return registry
