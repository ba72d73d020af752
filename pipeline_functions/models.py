"""
Data models for pipeline functions.
Uses Pydantic for validation and serialization.
"""

import os

from pydantic import BaseModel
from pydantic import Field
from pydantic import model_validator

DEFAULT_NAMESPACE = "http://pipeline-functions.dev/functions"
DEFAULT_PREFIX = "p"

ENV_NAMESPACE = "PIPELINE_FUNCTIONS_NAMESPACE"
ENV_PREFIX = "PIPELINE_FUNCTIONS_PREFIX"
ENV_DECODER = "PIPELINE_FUNCTIONS_DECODER"


class FunctionSignature(BaseModel):
    """Name and arity under which a function is registered."""

    namespace: str = Field(
        default=DEFAULT_NAMESPACE, description="Namespace URI of the function"
    )
    name: str = Field(..., min_length=1, description="Local name (e.g., 'decode-resource-uri')")
    min_arity: int = Field(default=0, ge=0, description="Minimum number of arguments")
    max_arity: int = Field(default=0, ge=0, description="Maximum number of arguments")
    description: str = Field(default="", description="Human-readable description")

    @model_validator(mode="after")
    def _check_arity_range(self) -> "FunctionSignature":
        if self.min_arity > self.max_arity:
            raise ValueError(
                f"min_arity ({self.min_arity}) exceeds max_arity ({self.max_arity})"
            )
        return self

    @property
    def qualified_name(self) -> str:
        """Clark notation, ``{namespace}name``."""
        return f"{{{self.namespace}}}{self.name}"

    @property
    def arity(self) -> str:
        if self.min_arity == self.max_arity:
            return str(self.min_arity)
        return f"{self.min_arity}..{self.max_arity}"


class FunctionsConfig(BaseModel):
    """Configuration for a function registry."""

    namespace: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Namespace URI the functions are registered under",
    )
    prefix: str = Field(
        default=DEFAULT_PREFIX,
        description="Prefix bound to the namespace in compiled expressions",
    )
    decoder: str | None = Field(
        default=None,
        description="Decoder import path ('module:attr') or entry point name",
    )

    @classmethod
    def from_env(cls, **overrides) -> "FunctionsConfig":
        """Build config from PIPELINE_FUNCTIONS_* environment variables.

        Explicit keyword overrides win over the environment; ``None`` overrides
        are ignored.
        """
        values = {}
        if namespace := os.environ.get(ENV_NAMESPACE):
            values["namespace"] = namespace
        if prefix := os.environ.get(ENV_PREFIX):
            values["prefix"] = prefix
        if decoder := os.environ.get(ENV_DECODER):
            values["decoder"] = decoder
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def namespaces(self) -> dict[str, str]:
        return {self.prefix: self.namespace}


class StaticContext(BaseModel):
    """What a function can see when the host compiles an expression.

    Passed to ``pre_evaluate``; carries nothing that depends on the document
    or on deployment configuration.
    """

    expression: str = Field(..., description="Source text being compiled")
    namespaces: dict[str, str] = Field(
        default_factory=dict, description="Prefix to namespace URI bindings in scope"
    )
