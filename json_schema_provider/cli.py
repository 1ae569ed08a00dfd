import json
import logging
import sys

import click

from .config import ProviderConfig
from .converter import Converter, to_json
from .document import parse_document
from .errors import DepthExceeded, MalformedDocumentError, SchemaCompilationError, ValidationFailed
from .schema import JsonSchema


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Write the converted document here instead of stdout")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log compilation and union resolution details")
@click.argument("schema_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("document_path", type=click.Path(exists=True, resolve_path=True))
def json_schema_provider(config, output, verbose, schema_path, document_path):
    """Validate DOCUMENT_PATH against SCHEMA_PATH and print its canonical JSON."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        try:
            with open(config) as f:
                config = ProviderConfig.from_dict(json.load(f))
        except ValueError as e:
            click.echo(f"error: invalid configuration: {e}", err=True)
            sys.exit(2)
    else:
        config = ProviderConfig()

    try:
        with open(schema_path, "rb") as f:
            schema = JsonSchema(f.read(), config)
        with open(document_path, "rb") as f:
            document = parse_document(f.read())
    except (SchemaCompilationError, MalformedDocumentError) as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(2)

    try:
        result = Converter(schema).to_object(document)
    except ValidationFailed as e:
        for violation in e.violations:
            click.echo(str(violation), err=True)
        sys.exit(1)
    except DepthExceeded as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    except SchemaCompilationError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(2)

    out = to_json(result, config)
    if output is None:
        click.echo(out)
    else:
        with open(output, "w") as f:
            f.write(out)
