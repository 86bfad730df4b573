"""Reverse rendering of fragments and documents to script text."""

from trigscript.render.document import render_document
from trigscript.render.fragment import FragmentRenderer, render_to_text

__all__ = [
    "FragmentRenderer",
    "render_document",
    "render_to_text",
]
