import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
import typer
from rich.console import Console
from typer.core import TyperGroup

from idtool import __version__
from idtool.config import load_config
from idtool.dsl import Toolchain, get_toolchain
from idtool.errors import IdToolError, InternalError, UsageError
from idtool.formatting import format_file, format_files
from idtool.generate import generate_file
from idtool.log import configure_logging
from idtool.methods import export_methods_json
from idtool.paths import PathSpecKind, parse_path_spec, resolve_path_spec
from idtool.symbols import print_symbols

logger = logging.getLogger(__name__)

SYNOPSIS = """SYNOPSIS
    idtool <command> src.id [out]

COMMANDS
    gen <idsrc> <goout>          parse <idsrc>, compile it, and write the generated Go code to <goout>
    fmt <idsrc> [<idout>]        parse <idsrc>, and overwrite it (or write <idout>) with formatted output
    sym <idsrc> SYM1 [SYM2 ...]  parse <idsrc>, and write to stdout the contents of the given symbols
    methods-json <idsrc>         parse <idsrc>, and write to stdout a JSON listing of its method prototypes

    <idsrc> is a single .id file, or dir/... for every .id file under dir (fmt, methods-json)

EXAMPLES
    # compile file.id to file.gen.go
    idtool gen a/b/file.id a/b/file.gen.go

    # format file.id
    idtool fmt a/b/file.id

    # format every .id file under a/
    idtool fmt a/...

    # format file.id to file2.id
    idtool fmt a/b/file.id a/b/file2.id

    # print the Foo and Bar declarations of file.id
    idtool sym a/b/file.id Foo Bar

    # output a JSON listing of the struct/union methods defined in file.id
    idtool methods-json a/b/file.id
"""

EXIT_USAGE = 1
EXIT_FAILURE = 2
EXIT_INTERNAL = 3


def _usage_exit(message: str) -> None:
    typer.echo(f"Usage error: {message}\n", err=True)
    typer.echo(SYNOPSIS, err=True)
    raise typer.Exit(code=EXIT_USAGE)


class _CommandGroup(TyperGroup):
    """Routes click's own usage failures through the same channel as bad arity.

    Covers a missing or unknown command and unknown options, both for the
    group and for the subcommands.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _usage_exit(e.format_message())

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            _usage_exit(e.format_message())


app = typer.Typer(
    cls=_CommandGroup,
    help="idtool - compile, format and inspect interface definition (.id) files",
)

console = Console()


@contextmanager
def _reporting_errors():
    """Map idtool exceptions to messages on stderr and exit codes."""
    try:
        yield
    except UsageError as e:
        _usage_exit(str(e))
    except InternalError as e:
        logger.exception("Internal error")
        typer.echo(f"Internal error: {e}", err=True)
        raise typer.Exit(code=EXIT_INTERNAL)
    except (IdToolError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_FAILURE)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise UsageError(message)


def _toolchain(ctx: typer.Context) -> Toolchain:
    return get_toolchain(indent=ctx.obj.format.indent)


@app.command()
def gen(
    ctx: typer.Context,
    args: Optional[list[str]] = typer.Argument(None, metavar="IDSRC GOOUT", show_default=False),
):
    """Parse IDSRC, compile it, and write the generated Go code to GOOUT."""
    args = args or []
    with _reporting_errors():
        _require(len(args) == 2, "gen command requires exactly two arguments: <idsrc> <goout>")
        generate_file(Path(args[0]), Path(args[1]), _toolchain(ctx))


@app.command()
def fmt(
    ctx: typer.Context,
    args: Optional[list[str]] = typer.Argument(None, metavar="IDSRC [IDOUT]", show_default=False),
):
    """Rewrite spec files in canonical form, printing each file written.

    IDSRC is a single .id file or dir/... for every .id file under dir.
    With IDOUT, the formatted single file is written there instead.
    """
    args = args or []
    with _reporting_errors():
        _require(1 <= len(args) <= 2, "fmt command requires one or two arguments: <idsrc> [<idout>]")
        config = ctx.obj
        toolchain = _toolchain(ctx)

        if len(args) == 2:
            path_spec = parse_path_spec(args[0])
            _require(
                path_spec.kind is PathSpecKind.FILE,
                f'fmt output path requires a single .id source, got "{args[0]}"',
            )
            if format_file(path_spec.path, Path(args[1]), toolchain, config.format.file_mode):
                typer.echo(args[1])
            return

        for written in format_files(resolve_path_spec(args[0]), toolchain, config.format.file_mode):
            typer.echo(str(written))


@app.command()
def sym(
    ctx: typer.Context,
    args: Optional[list[str]] = typer.Argument(None, metavar="IDSRC SYM1 [SYM2 ...]", show_default=False),
):
    """Print the declarations of the given symbols, in the order requested."""
    args = args or []
    with _reporting_errors():
        _require(len(args) >= 2, "sym command requires a source file and at least one symbol")
        output = print_symbols(Path(args[0]), args[1:], _toolchain(ctx))

    typer.echo(output, nl=False)


@app.command()
def methods_json(
    ctx: typer.Context,
    args: Optional[list[str]] = typer.Argument(None, metavar="IDSRC", show_default=False),
):
    """Print a JSON listing of the struct/union method prototypes."""
    args = args or []
    with _reporting_errors():
        _require(len(args) == 1, "methods-json command requires exactly one argument")
        output = export_methods_json(args[0], _toolchain(ctx))

    typer.echo(output, nl=False)


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"idtool version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug details to stderr"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (defaults to ./.idtool)",
    )):
    config = load_config(config_path)
    configure_logging(verbose=verbose, level=config.log_level)
    ctx.obj = config
