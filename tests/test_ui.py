"""Tests for the console sink and the ShowFinder controller."""

import asyncio
import io
from unittest.mock import AsyncMock, MagicMock

import pytest

from showfinder.media.envelope import ErrorKind, Failed, Found, build_error
from showfinder.media.models import Episode, Show
from showfinder.media.tvmaze import TVMazeClient
from showfinder.ui.controller import ShowFinder
from showfinder.ui.render import TextSink, episode_counter, html_to_text


def make_show(show_id: int, name: str = "Batman") -> Show:
    return Show(id=show_id, name=name, summary="<p>Gotham <b>hero</b></p>", image="b.png")


def make_episode(episode_id: int) -> Episode:
    return Episode(
        id=episode_id,
        name=f"Episode {episode_id}",
        season=1,
        number=episode_id,
        summary="",
        url=f"https://www.tvmaze.com/episodes/{episode_id}",
    )


# =============================================================================
# Rendering Tests
# =============================================================================


class TestHtmlToText:
    """Tests for html_to_text."""

    def test_tags_removed(self):
        """Test tags are stripped and text kept."""
        assert html_to_text("<p>Gotham <b>hero</b></p>") == "Gotham hero"

    def test_br_becomes_newline(self):
        """Test <br> tags become line breaks."""
        assert html_to_text("first <br><br>second") == "first\nsecond"

    def test_entities_unescaped(self):
        """Test HTML entities are decoded."""
        assert html_to_text("Law &amp; Order") == "Law & Order"

    def test_empty(self):
        """Test None and empty summaries."""
        assert html_to_text(None) == ""
        assert html_to_text("") == ""


class TestEpisodeCounter:
    """Tests for episode_counter."""

    def test_singular(self):
        assert episode_counter(1) == "1 episode"

    def test_plural(self):
        assert episode_counter(12) == "12 episodes"


class TestTextSink:
    """Tests for TextSink."""

    def test_render_shows(self):
        """Test every show is printed with its episodes affordance."""
        stream = io.StringIO()
        TextSink(stream).render_shows(Found(records=[make_show(1), make_show(2, "Robin")]))

        output = stream.getvalue()
        assert "== Batman == [id 1]" in output
        assert "== Robin == [id 2]" in output
        assert "Gotham hero" in output
        assert output.count("Episodes: request show") == 2

    def test_render_shows_error(self):
        """Test an error result prints the card without episodes affordance."""
        stream = io.StringIO()
        envelope = build_error("Oh SNAP!", "No shows were found. <br><br>Code = 200.", "t.png")
        TextSink(stream).render_shows(Failed.from_envelope(envelope))

        output = stream.getvalue()
        assert "== Oh SNAP! ==" in output
        assert "No shows were found.\nCode = 200." in output
        assert "Episodes:" not in output

    def test_render_episodes(self):
        """Test episodes are listed with a counter."""
        stream = io.StringIO()
        result = Found(records=[make_episode(1), make_episode(2)])

        listed = TextSink(stream).render_episodes(result, 975, "Batman")

        output = stream.getvalue()
        assert listed is True
        assert '"Batman" Episodes' in output
        assert '[975-1] "Episode 1" (season 1, number 1)' in output
        assert "2 episodes" in output

    def test_render_episodes_error(self):
        """Test an episode error prints only the description."""
        stream = io.StringIO()
        envelope = build_error(
            "", "Episode listing for 'Batman' was not successful. <br>", "", ErrorKind.NON_SUCCESS_STATUS
        )

        listed = TextSink(stream).render_episodes(Failed.from_envelope(envelope), 975, "Batman")

        output = stream.getvalue()
        assert listed is False
        assert "Episode listing for 'Batman' was not successful." in output
        assert "1 episode" not in output


# =============================================================================
# Controller Tests
# =============================================================================


class TestShowFinder:
    """Tests for ShowFinder."""

    @pytest.fixture
    def client(self):
        """Create a mock TVmaze client."""
        return MagicMock(spec=TVMazeClient)

    @pytest.mark.asyncio
    async def test_search_renders_result(self, client):
        """Test a search is trimmed, run and rendered."""
        result = Found(records=[make_show(1)])
        client.search_shows = AsyncMock(return_value=result)
        sink = MagicMock()

        returned = await ShowFinder(client, sink).on_search_submit("  batman  ")

        assert returned is result
        client.search_shows.assert_awaited_once_with("batman")
        sink.render_shows.assert_called_once_with(result)

    @pytest.mark.asyncio
    async def test_blank_search_ignored(self, client):
        """Test blank input runs no query."""
        client.search_shows = AsyncMock()
        sink = MagicMock()

        returned = await ShowFinder(client, sink).on_search_submit("   ")

        assert returned is None
        client.search_shows.assert_not_awaited()
        sink.render_shows.assert_not_called()

    @pytest.mark.asyncio
    async def test_error_result_rendered(self, client):
        """Test failures go to the sink like any other result."""
        result = Failed.from_envelope(build_error("Oh SNAP!", "none", "t.png", ErrorKind.NOTHING_FOUND))
        client.search_shows = AsyncMock(return_value=result)
        sink = MagicMock()

        returned = await ShowFinder(client, sink).on_search_submit("zzzz")

        assert returned is result
        sink.render_shows.assert_called_once_with(result)

    @pytest.mark.asyncio
    async def test_episodes_rendered(self, client):
        """Test episode requests are run and rendered."""
        result = Found(records=[make_episode(1)])
        client.get_episodes = AsyncMock(return_value=result)
        sink = MagicMock()

        returned = await ShowFinder(client, sink).on_episodes_requested(5, "Lost")

        assert returned is result
        client.get_episodes.assert_awaited_once_with(5, "Lost")
        sink.render_episodes.assert_called_once_with(result, 5, "Lost")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("show_id", [0, -1])
    async def test_episodes_invalid_show_id_ignored(self, client, show_id):
        """Test non-positive show ids run no query."""
        client.get_episodes = AsyncMock()
        sink = MagicMock()

        returned = await ShowFinder(client, sink).on_episodes_requested(show_id, "Lost")

        assert returned is None
        client.get_episodes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_search_response_discarded(self, client):
        """Test a slow earlier search does not overwrite a newer one."""
        release_first = asyncio.Event()
        first_result = Found(records=[make_show(1)])
        second_result = Found(records=[make_show(2)])

        async def fake_search(query):
            if query == "first":
                await release_first.wait()
                return first_result
            return second_result

        client.search_shows = AsyncMock(side_effect=fake_search)
        sink = MagicMock()
        finder = ShowFinder(client, sink)

        first_task = asyncio.create_task(finder.on_search_submit("first"))
        await asyncio.sleep(0)
        second = await finder.on_search_submit("second")
        release_first.set()
        first = await first_task

        assert second is second_result
        assert first is None
        sink.render_shows.assert_called_once_with(second_result)

    @pytest.mark.asyncio
    async def test_stale_episodes_response_discarded(self, client):
        """Test a slow earlier episode listing is dropped."""
        release_first = asyncio.Event()
        first_result = Found(records=[make_episode(1)])
        second_result = Found(records=[make_episode(2)])

        async def fake_episodes(show_id, show_name):
            if show_id == 1:
                await release_first.wait()
                return first_result
            return second_result

        client.get_episodes = AsyncMock(side_effect=fake_episodes)
        sink = MagicMock()
        finder = ShowFinder(client, sink)

        first_task = asyncio.create_task(finder.on_episodes_requested(1, "One"))
        await asyncio.sleep(0)
        await finder.on_episodes_requested(2, "Two")
        release_first.set()

        assert await first_task is None
        sink.render_episodes.assert_called_once_with(second_result, 2, "Two")
