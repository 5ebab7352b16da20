"""Command-line interface for the JSON Beautifier."""

import logging
import sys
from typing import List, Optional

import click

from . import __version__
from .io import FileReader, FileWriter
from .json_beautifier import JSONBeautifier
from .lexer import comments_supported
from .types import ProcessingError

PROG_NAME = "json-beautify"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name=PROG_NAME)
@click.argument("input_path", metavar="INPUT")
@click.argument("output_path", metavar="[OUTPUT]", required=False)
@click.option("--indent", default=4, show_default=True, type=click.IntRange(min=0),
              help="Spaces per nesting level")
@click.option("--sort-keys", is_flag=True, help="Write object keys in sorted order")
@click.option("--allow-comments/--no-allow-comments", default=None,
              help="Accept comments in the input [default: on when the ijson backend supports them]")
@click.option("--max-depth", type=click.IntRange(min=1), default=None,
              help="Reject documents nested deeper than this")
@click.option("--profile", is_flag=True, help="Print a performance summary to stderr")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def beautify(ctx: click.Context, input_path: str, output_path: Optional[str], indent: int,
             sort_keys: bool, allow_comments: Optional[bool], max_depth: Optional[int],
             profile: bool, verbose: bool):
    """Reformat the JSON document INPUT with consistent indentation.

    The result is written to OUTPUT, which defaults to INPUT itself. Either
    may be "-" for standard input and standard output.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO if profile else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    if allow_comments is None:
        allow_comments = comments_supported()
    if output_path is None:
        output_path = input_path

    beautifier = JSONBeautifier(
        indent=indent,
        sort_keys=sort_keys,
        allow_comments=allow_comments,
        max_depth=max_depth,
        enable_profiling=profile
    )

    try:
        data = FileReader().read(input_path)
    except ProcessingError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    result = beautifier.beautify(data)
    if not result.success:
        for error in result.errors or []:
            click.echo(f"{input_path}: {error}", err=True)
        ctx.exit(1)

    try:
        FileWriter().write(output_path, result.output)
    except ProcessingError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    if beautifier.profiler is not None:
        click.echo(beautifier.profiler.export_metrics("summary"), err=True)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line and return its exit code."""
    try:
        exit_code = beautify.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return 1
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return exit_code or 0


if __name__ == '__main__':
    sys.exit(main())
