import json

import click
import jinja2
from loguru import logger

from . import __version__
from .cli_utils import reconstruct_command_line
from .compiler import SdlCompiler
from .config import CompileOptions
from .emitter import TEMPLATE_DIR
from .errors import SdlError
from .schema_ast import SchemaParser
from .utils import type_name_from_path


def render_header(command: click.Command) -> str:
    env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
    template = env.from_string((TEMPLATE_DIR / "header.graphql.jinja2").read_text(encoding="utf-8"))
    return template.render(version=__version__, command_line=reconstruct_command_line(command)).rstrip("\n")


@click.command(name="schema_to_sdl")
@click.option("--name", "-n", default=None, type=str, help="Type name for the root schema (defaults to the file name)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--strict", is_flag=True, default=False, help="Fail on fields referencing unregistered object schemas")
@click.option("--preserve-enum-case", is_flag=True, default=False, help="Emit enum values verbatim instead of upper-casing them")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log compilation details to stderr")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def cli(name, config, strict, preserve_enum_case, verbose, path, output):
    """Compile the definitions of a JSON Schema file to SDL type definitions."""
    if verbose:
        logger.enable("schema_to_sdl")

    with open(path) as f:
        schema = json.load(f)

    if config is not None:
        with open(config) as f:
            options = CompileOptions.from_dict(json.load(f))
    else:
        options = CompileOptions()

    # CLI flags override the config file when set
    if strict:
        options.strict = True
    if preserve_enum_case:
        options.preserve_enum_case = True

    if name is None:
        name = type_name_from_path(path)

    try:
        schemas = SchemaParser().parse(schema, name)
        out = SdlCompiler(options).compile_batch(schemas)
    except SdlError as e:
        raise click.ClickException(str(e)) from e

    if options.add_generation_comment:
        out = f"{render_header(cli)}\n\n{out}"

    with open(output, "w") as f:
        f.write(out + "\n")
