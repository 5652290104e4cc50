"""CLI entry point for ascii-sketch."""

import logging
import sys

import click

from ascii_sketch.config import EditorOptions
from ascii_sketch.drawing.charset import Symbols
from ascii_sketch.drawing.pathfinder import NoRouteFound
from ascii_sketch.drawing.shapes import DrawRequest, erase_on_buffer, write_text
from ascii_sketch.editor.buffer import DiagramLoadError
from ascii_sketch.editor.document import Document
from ascii_sketch.types import PathMode, Position, Shape


class RectParam(click.ParamType):
    """Two corners given as ``X1,Y1,X2,Y2``."""

    name = "X1,Y1,X2,Y2"

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value
        parts = value.split(",")
        try:
            x1, y1, x2, y2 = (int(p) for p in parts)
        except ValueError:
            self.fail(f"expected four comma-separated integers, got '{value}'", param, ctx)
        if min(x1, y1, x2, y2) < 0:
            self.fail(f"coordinates must not be negative, got '{value}'", param, ctx)
        return Position(x1, y1), Position(x2, y2)


class TextParam(click.ParamType):
    """A text stamp given as ``X,Y,TEXT``; ``\\n`` in TEXT starts a new line."""

    name = "X,Y,TEXT"

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value
        parts = value.split(",", 2)
        if len(parts) != 3:
            self.fail(f"expected X,Y,TEXT, got '{value}'", param, ctx)
        try:
            x, y = int(parts[0]), int(parts[1])
        except ValueError:
            self.fail(f"expected integer coordinates, got '{value}'", param, ctx)
        if x < 0 or y < 0:
            self.fail(f"coordinates must not be negative, got '{value}'", param, ctx)
        return Position(x, y), parts[2].replace("\\n", "\n")


RECT = RectParam()
TEXT = TextParam()


@click.command()
@click.argument("input", required=False, type=click.Path(dir_okay=False))
@click.option("--box", "-b", "boxes", type=RECT, multiple=True, help="Draw a box between two corners")
@click.option("--line", "-l", "lines", type=RECT, multiple=True, help="Draw a line from the first point to the second")
@click.option("--arrow", "-A", "arrows", type=RECT, multiple=True, help="Draw an arrow from the first point to the second")
@click.option("--erase", "-e", "erasures", type=RECT, multiple=True, help="Blank everything between two corners")
@click.option("--text", "-t", "texts", type=TEXT, multiple=True, help="Write text at a position")
@click.option(
    "--mode",
    "-m",
    "mode",
    type=click.Choice([m.value for m in PathMode], case_sensitive=False),
    default=None,
    help="How lines and arrows are routed (default elbow90)",
)
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Use plain ASCII instead of Unicode box drawing")
@click.option("--config", "-c", "config", type=click.Path(exists=True, dir_okay=False), default=None, help="TOML options file")
@click.option("--strip-margins", "-s", "strip_margins", is_flag=True, help="Strip all margin whitespace")
@click.option("--keep-trailing-ws", "-k", "keep_trailing_ws", is_flag=True, help="Keep trailing whitespace")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log debug output to stderr")
def main(
    input: str | None,
    boxes: tuple,
    lines: tuple,
    arrows: tuple,
    erasures: tuple,
    texts: tuple,
    mode: str | None,
    use_ascii: bool,
    config: str | None,
    strip_margins: bool,
    keep_trailing_ws: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Draw boxes, lines and arrows into a text diagram.

    Reads the diagram from INPUT (or stdin), applies erasures, boxes, lines,
    arrows and text in that order, and prints the result.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    if config is not None:
        try:
            opts = EditorOptions.from_toml(config)
        except (OSError, ValueError) as e:
            click.echo(f"error: cannot load config '{config}': {e}", err=True)
            sys.exit(1)
    else:
        opts = EditorOptions()

    if mode is not None:
        opts.path_mode = PathMode.parse(mode)
    if use_ascii:
        opts.symbols = Symbols.ascii()
    opts.strip_margin_ws = opts.strip_margin_ws or strip_margins
    opts.keep_trailing_ws = opts.keep_trailing_ws or keep_trailing_ws

    doc = Document(opts)
    try:
        if input:
            doc.open_file(input)
        else:
            doc.load(click.get_binary_stream("stdin"))
    except DiagramLoadError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    symbols = opts.symbols
    for src, dst in erasures:
        doc.edit(lambda buf, src=src, dst=dst: erase_on_buffer(buf, src, dst, symbols))

    requests = [DrawRequest(src, dst, Shape.Box, opts.path_mode, symbols) for src, dst in boxes]
    requests += [DrawRequest(src, dst, Shape.Line, opts.path_mode, symbols) for src, dst in lines]
    requests += [DrawRequest(src, dst, Shape.Arrow, opts.path_mode, symbols) for src, dst in arrows]
    try:
        for request in requests:
            doc.commit(request)
    except NoRouteFound as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    for origin, text in texts:
        doc.edit(lambda buf, origin=origin, text=text: write_text(buf, origin, text, symbols=symbols))

    if output:
        try:
            doc.save_as(output)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(doc.rendered(), nl=False)


if __name__ == "__main__":
    main()
