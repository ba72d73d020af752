"""
Decoder loading.

Resolves a decoder reference from configuration:
1. ``package.module:attribute`` import paths
2. Python entry points in the ``pipeline_functions.decoders`` group

Classes are instantiated without arguments; plain ``str -> str`` callables
are adapted with ``CallableDecoder``.
"""

import importlib
import importlib.metadata
import inspect
import logging
from collections.abc import Callable
from typing import Any

from .errors import DecoderLoadError
from .interfaces import URIDecoder

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "pipeline_functions.decoders"


class CallableDecoder:
    """Adapts a plain function to the URIDecoder interface."""

    def __init__(self, fn: Callable[[str], str]):
        self._fn = fn

    def decode_resource_uri(self, uri: str) -> str:
        return self._fn(uri)

    def __repr__(self) -> str:
        return f"CallableDecoder({getattr(self._fn, '__qualname__', self._fn)!r})"


def load_decoder(reference: str) -> URIDecoder:
    """
    Load a decoder from an import path or entry point name.

    Args:
        reference: ``module:attribute`` or an entry point name

    Returns:
        A URIDecoder instance

    Raises:
        DecoderLoadError: Reference cannot be resolved or is not a decoder
    """
    if not reference:
        raise DecoderLoadError("Empty decoder reference")

    if ":" in reference:
        target = import_object(reference)
    else:
        target = _load_entry_point(reference)

    return _as_decoder(reference, target)


def import_object(reference: str) -> Any:
    """Import ``package.module:attribute`` (attribute may be dotted)."""
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise DecoderLoadError(f"Expected 'module:attribute', got '{reference}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DecoderLoadError(f"Cannot import '{module_name}': {e}") from e

    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise DecoderLoadError(
                f"'{module_name}' has no attribute '{attribute}'"
            ) from e

    logger.debug(f"Imported '{reference}'")
    return target


def _load_entry_point(name: str) -> Any:
    eps = importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)
    for ep in eps:
        if ep.name == name:
            try:
                target = ep.load()
            except Exception as e:
                raise DecoderLoadError(
                    f"Entry point '{name}' failed to load: {e}"
                ) from e
            logger.info(f"Loaded decoder '{name}' via entry point")
            return target

    raise DecoderLoadError(
        f"No decoder named '{name}' in entry point group '{ENTRY_POINT_GROUP}'"
    )


def _as_decoder(reference: str, target: Any) -> URIDecoder:
    if inspect.isclass(target):
        try:
            target = target()
        except TypeError as e:
            raise DecoderLoadError(
                f"Decoder class '{reference}' cannot be created without arguments: {e}"
            ) from e

    if isinstance(target, URIDecoder):
        return target

    if callable(target):
        return CallableDecoder(target)

    raise DecoderLoadError(
        f"'{reference}' is not a decoder (got {type(target).__name__})"
    )
