"""ascii-sketch: a text-glyph diagram buffer with line, box, arrow and routed connector drawing."""

from ascii_sketch.config import EditorOptions
from ascii_sketch.drawing.charset import DEFAULT_SYMBOLS, CharSet, Symbols
from ascii_sketch.drawing.pathfinder import NoRouteFound, astar_path
from ascii_sketch.drawing.shapes import DrawRequest, apply_request
from ascii_sketch.editor.buffer import Buffer, DiagramLoadError
from ascii_sketch.editor.document import Document
from ascii_sketch.types import Cell, CellKind, PathMode, Position, Shape

__all__ = [
    "DEFAULT_SYMBOLS",
    "Buffer",
    "Cell",
    "CellKind",
    "CharSet",
    "DiagramLoadError",
    "Document",
    "DrawRequest",
    "EditorOptions",
    "NoRouteFound",
    "PathMode",
    "Position",
    "Shape",
    "Symbols",
    "apply_request",
    "astar_path",
    "sketch",
]


def sketch(text: str, *requests: DrawRequest) -> str:
    """Draw ``requests`` into the diagram ``text`` and return the result.

    Args:
        text: Existing diagram, one grid row per line (may be empty).
        requests: Box, line and arrow gestures, committed in order.

    Returns:
        The diagram text with trailing whitespace stripped from every row.

    Raises:
        NoRouteFound: If a routed request cannot reach its destination.
    """
    doc = Document.from_text(text)
    for request in requests:
        doc.commit(request)
    return doc.rendered()
