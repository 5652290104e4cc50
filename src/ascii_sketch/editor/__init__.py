"""Diagram state: the glyph buffer, undo history and the document that owns them."""
