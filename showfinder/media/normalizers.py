"""Normalizers turning raw TVmaze payloads into Show and Episode records.

Each normalizer is a pure function ``(raw_entries, context_label) -> QueryResult``
and is injected into ``TVMazeClient.fetch_and_normalize``.
"""

from typing import Any, Protocol

import structlog
from pydantic import ValidationError

from showfinder.config import settings
from showfinder.media.envelope import ErrorKind, Failed, Found, QueryResult, build_error
from showfinder.media.models import Episode, RawEpisode, RawShowWrapper, Show

logger = structlog.get_logger(__name__)

ANOMALY_HEADLINE = "We are experiencing operating difficulties..."


class Normalizer(Protocol):
    """Strategy mapping a non-empty raw payload list to a query result."""

    def __call__(self, raw_entries: list[Any], context_label: str) -> QueryResult: ...


def resolve_image(wrapper: RawShowWrapper) -> str:
    """Pick the medium image, falling back to the placeholder.

    A missing image object and an image object without a medium link are
    treated the same way.
    """
    image = wrapper.show.image
    if image and image.medium:
        return image.medium
    return settings.placeholder_image


def show_anomaly(query: str, raw_count: int) -> Failed:
    """Error result for a search payload that could not be normalized."""
    return Failed.from_envelope(
        build_error(
            ANOMALY_HEADLINE,
            f"Something bad happened while processing the {raw_count} show(s) "
            f"found for search of '{query}'.",
            settings.error_image,
            ErrorKind.NORMALIZATION_ANOMALY,
        )
    )


def episode_anomaly(show_name: str, raw_count: int) -> Failed:
    """Error result for an episode payload that could not be normalized."""
    # Episode errors render inline in a list: no headline, no image
    return Failed.from_envelope(
        build_error(
            "",
            f"Something bad happened while processing <br>the {raw_count} "
            f'episode(s) found for "{show_name}".',
            "",
            ErrorKind.NORMALIZATION_ANOMALY,
        )
    )


def normalize_shows(raw_entries: list[Any], query: str) -> QueryResult:
    """Normalize ``/search/shows`` hits.

    One malformed hit fails the whole search, so a result never holds fewer
    shows than TVmaze returned.

    Args:
        raw_entries: Decoded JSON list of search hits
        query: Search text, used in the anomaly description

    Returns:
        Found with one Show per hit, or Failed if any hit is malformed
    """
    shows: list[Show] = []

    for index, entry in enumerate(raw_entries):
        try:
            wrapper = RawShowWrapper.model_validate(entry)
            shows.append(
                Show(
                    id=wrapper.show.id,
                    name=wrapper.show.name or "",
                    summary=wrapper.show.summary or "",
                    image=resolve_image(wrapper),
                )
            )
        except ValidationError as e:
            logger.error(
                "show_normalization_anomaly",
                query=query,
                index=index,
                raw_count=len(raw_entries),
                errors=e.error_count(),
            )
            return show_anomaly(query, len(raw_entries))

    if not shows:
        logger.error("show_normalization_anomaly", query=query, raw_count=0)
        return show_anomaly(query, 0)

    return Found(records=shows)


def normalize_episodes(raw_entries: list[Any], show_name: str) -> QueryResult:
    """Normalize ``/shows/{id}/episodes``. Fields are copied verbatim.

    Any malformed episode fails the whole listing.
    """
    episodes: list[Episode] = []

    for index, entry in enumerate(raw_entries):
        try:
            raw = RawEpisode.model_validate(entry)
            episodes.append(Episode(**raw.model_dump()))
        except ValidationError as e:
            logger.error(
                "episode_normalization_anomaly",
                show_name=show_name,
                index=index,
                raw_count=len(raw_entries),
                errors=e.error_count(),
            )
            return episode_anomaly(show_name, len(raw_entries))

    if not episodes:
        logger.error("episode_normalization_anomaly", show_name=show_name, raw_count=0)
        return episode_anomaly(show_name, 0)

    return Found(records=episodes)
