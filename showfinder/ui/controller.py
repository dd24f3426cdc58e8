"""Inbound triggers: search submit and episode requests.

ShowFinder is what a front end calls. It tidies user input, runs the matching
TVmaze query and hands the result to a sink. Responses that arrive after a
newer request of the same kind was issued are dropped, so the latest request
always wins.
"""

import structlog

from showfinder.media.envelope import QueryResult
from showfinder.media.tvmaze import TVMazeClient
from showfinder.ui.render import RenderSink

logger = structlog.get_logger(__name__)


class ShowFinder:
    """Controller tying a TVMazeClient to a RenderSink.

    Example:
        async with TVMazeClient() as client:
            finder = ShowFinder(client, TextSink())
            await finder.on_search_submit("batman")
            await finder.on_episodes_requested(975, "Batman")
    """

    def __init__(self, client: TVMazeClient, sink: RenderSink):
        self._client = client
        self._sink = sink
        self._search_seq = 0
        self._episodes_seq = 0

    async def on_search_submit(self, query_text: str) -> QueryResult | None:
        """Search shows and render them.

        Returns:
            The rendered result, or None if the query was blank or superseded
        """
        query = query_text.strip()
        if not query:
            logger.debug("search_ignored_blank_query")
            return None

        self._search_seq += 1
        seq = self._search_seq

        result = await self._client.search_shows(query)

        if seq != self._search_seq:
            logger.info("stale_response_discarded", kind="search", query=query, seq=seq)
            return None

        self._sink.render_shows(result)
        return result

    async def on_episodes_requested(self, show_id: int, show_name: str) -> QueryResult | None:
        """List episodes of a show and render them.

        Returns:
            The rendered result, or None if show_id is not positive or the
            response was superseded
        """
        if show_id <= 0:
            logger.debug("episodes_ignored_invalid_show_id", show_id=show_id)
            return None

        self._episodes_seq += 1
        seq = self._episodes_seq

        result = await self._client.get_episodes(show_id, show_name)

        if seq != self._episodes_seq:
            logger.info("stale_response_discarded", kind="episodes", show_id=show_id, seq=seq)
            return None

        listed = self._sink.render_episodes(result, show_id, show_name)
        logger.debug("episodes_rendered", show_id=show_id, listed=listed)
        return result
