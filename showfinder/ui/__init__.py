"""Console front end: presentation sink, controller and entry point."""

from showfinder.ui.controller import ShowFinder
from showfinder.ui.render import RenderSink, TextSink

__all__ = ["ShowFinder", "RenderSink", "TextSink"]
