"""Presentation sinks for query results.

A sink receives exactly one QueryResult per user action. On ``Failed`` it
shows the single envelope and no episodes affordance; on ``Found`` it shows
every record.
"""

import html
import re
import sys
from typing import Protocol, TextIO

from showfinder.media.envelope import Failed, QueryResult


class RenderSink(Protocol):
    """Anything that can display show and episode results."""

    def render_shows(self, result: QueryResult) -> None: ...

    def render_episodes(self, result: QueryResult, show_id: int, show_name: str) -> bool: ...


def html_to_text(fragment: str | None) -> str:
    """Reduce a TVmaze HTML summary to plain text.

    ``<br>`` becomes a line break, other tags are dropped.
    """
    if not fragment:
        return ""
    text = re.sub(r"<br\s*/?>", "\n", fragment, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", " ", text)
    text = html.unescape(text)
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.split("\n")]
    return "\n".join(line for line in lines if line)


def episode_counter(count: int) -> str:
    """``1 episode`` / ``N episodes``."""
    return f"{count} episode" if count == 1 else f"{count} episodes"


class TextSink:
    """Writes results as plain text to a stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream or sys.stdout

    def _write(self, line: str = "") -> None:
        self._stream.write(line + "\n")

    def render_shows(self, result: QueryResult) -> None:
        """Print show cards, or the single error card."""
        if isinstance(result, Failed):
            envelope = result.envelope
            self._write(f"== {envelope.name} ==")
            self._write(html_to_text(envelope.summary))
            self._write()
            return

        for show in result.records:
            self._write(f"== {show.name} == [id {show.id}]")
            summary = html_to_text(show.summary)
            if summary:
                self._write(summary)
            self._write(f"Image: {show.image}")
            self._write(f"Episodes: request show {show.id}")
            self._write()

    def render_episodes(self, result: QueryResult, show_id: int, show_name: str) -> bool:
        """Print the episode list of a show.

        Returns:
            True if episodes were listed, False if an error entry was shown
        """
        self._write(f'"{show_name}" Episodes')

        if isinstance(result, Failed):
            self._write(f"  - {html_to_text(result.envelope.summary)}")
            self._write()
            return False

        for episode in result.records:
            self._write(
                f'  - [{show_id}-{episode.id}] "{episode.name}" '
                f"(season {episode.season}, number {episode.number}) {episode.url}"
            )
        self._write(episode_counter(len(result.records)))
        self._write()
        return True
