"""
CLI for pipeline functions.

Provides the `pipeline-functions` command for evaluating expressions with the
registered functions and for checking custom functions against the contract.
"""

import logging
import sys

import click
from lxml import etree

from . import __version__
from .errors import PipelineFunctionError
from .evaluator import XPathEvaluator
from .loader import import_object
from .models import FunctionsConfig
from .registry import create_registry
from .validation import FunctionValidator
from .validation import ValidationResult


SEVERITY_COLORS = {"error": "red", "warning": "yellow", "info": "blue"}


def print_checks(result: ValidationResult) -> None:
    for check in result.checks:
        mark = "ok" if check.passed else "FAIL"
        label = click.style(f"{mark:>4} {check.severity:<7}", fg=SEVERITY_COLORS[check.severity])
        click.echo(f"  {label} {check.name}: {check.message}")


def format_value(value) -> list[str]:
    """Render an XPath result as output lines."""
    if isinstance(value, list):
        lines = []
        for item in value:
            if isinstance(item, etree._Element):
                lines.append(etree.tostring(item, encoding="unicode", with_tail=False))
            else:
                lines.append(str(item))
        return lines
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, float) and value.is_integer():
        return [str(int(value))]
    return [str(value)]


def parse_variables(pairs: tuple[str, ...]) -> dict[str, str]:
    variables = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got '{pair}'", param_hint="--var")
        variables[name] = value
    return variables


@click.group()
@click.version_option(version=__version__, prog_name="pipeline-functions")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Pipeline Functions - runtime XPath extension functions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("expression")
@click.option(
    "--file",
    "-f",
    "xml_file",
    type=click.Path(exists=True, dir_okay=False),
    help="XML document to evaluate against (defaults to an empty document)",
)
@click.option(
    "--decoder",
    "-d",
    help="Decoder import path ('module:attr') or entry point name",
)
@click.option("--namespace", help="Namespace URI for the functions")
@click.option("--prefix", help="Prefix bound to the function namespace")
@click.option("--var", "variables", multiple=True, help="XPath variable as NAME=VALUE")
def evaluate(
    expression: str,
    xml_file: str | None,
    decoder: str | None,
    namespace: str | None,
    prefix: str | None,
    variables: tuple[str, ...],
) -> None:
    """Evaluate an XPath EXPRESSION with the pipeline functions bound.

    Examples:

        pipeline-functions evaluate "p:decode-resource-uri('/1.0/img/logo.png')" -d mypkg.decoders:Decoder

        pipeline-functions evaluate "p:decode-resource-uri(//link/@href)" -f page.xml -d versioned
    """
    config = FunctionsConfig.from_env(namespace=namespace, prefix=prefix, decoder=decoder)
    try:
        evaluator = XPathEvaluator(create_registry(config))
        node = etree.parse(xml_file) if xml_file else etree.ElementTree(etree.Element("document"))
        result = evaluator.evaluate(expression, node, **parse_variables(variables))
    except PipelineFunctionError as e:
        raise click.ClickException(str(e)) from e
    except (etree.XPathError, etree.XMLSyntaxError) as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    for line in format_value(result):
        click.echo(line)


@cli.command(name="list-functions")
@click.option("--namespace", help="Namespace URI for the functions")
def list_functions(namespace: str | None) -> None:
    """List the functions a registry provides."""
    config = FunctionsConfig.from_env(namespace=namespace)
    # Listing does not call the decoder
    registry = create_registry(config, decoder=_UnusedDecoder())

    for signature in registry.list_functions():
        name = click.style(f"{config.prefix}:{signature.name}", fg="cyan", bold=True)
        click.echo(f"  {name:40} arity {signature.arity:6} {signature.description}")
    click.echo()
    click.echo(f"  namespace: {config.namespace}")


@cli.command()
@click.argument("reference")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only show summary, not individual checks",
)
def validate(reference: str, quiet: bool) -> None:
    """Validate that REFERENCE ('module:attr') implements the function contract.

    Examples:

        pipeline-functions validate pipeline_functions.functions:DecodeResourceURI
    """
    try:
        target = import_object(reference)
    except PipelineFunctionError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Validating function: {reference}")
    click.echo()

    result = FunctionValidator().validate(target)

    if not quiet:
        print_checks(result)
        click.echo()
    click.secho(result.summary(), fg="green" if result.passed else "red", bold=True)

    sys.exit(0 if result.passed else 1)


class _UnusedDecoder:
    def decode_resource_uri(self, uri: str) -> str:
        raise RuntimeError("decoder not configured")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
