"""TVmaze API client.

Searches shows and lists episodes through a single fetch routine. Every call
returns a QueryResult: transport faults, non-200 statuses and empty results
come back as ``Failed`` instead of being raised.

API Documentation: https://www.tvmaze.com/api
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from showfinder.config import settings
from showfinder.media.envelope import ErrorKind, Failed, QueryResult, build_error
from showfinder.media.normalizers import Normalizer, normalize_episodes, normalize_shows

logger = structlog.get_logger(__name__)

SUCCESS_STATUS = 200
SEARCH_ERROR_HEADLINE = "We are experiencing operating difficulties..."


# =============================================================================
# Error messages
# =============================================================================


@dataclass(frozen=True)
class ErrorMessage:
    """Headline, description prefix and image for one failure case."""

    headline: str
    description: str
    image: str


@dataclass(frozen=True)
class ErrorMessages:
    """Messages for the three failures the fetch routine can report."""

    not_found: ErrorMessage
    not_ok: ErrorMessage
    unexpected: ErrorMessage


def show_search_messages(query: str) -> ErrorMessages:
    """Error messages for a show search."""
    return ErrorMessages(
        not_found=ErrorMessage(
            headline="Oh SNAP!",
            description=(
                f"No shows were found for '{query}'. "
                "Please change your search and try again. <br><br>"
            ),
            image=settings.placeholder_image,
        ),
        not_ok=ErrorMessage(
            headline=SEARCH_ERROR_HEADLINE,
            description=f"Show search for '{query}' was not successful. <br><br>",
            image=settings.error_image,
        ),
        unexpected=ErrorMessage(
            headline=SEARCH_ERROR_HEADLINE,
            description=f"Search for '{query}' was not performed.",
            image=settings.error_image,
        ),
    )


def episode_messages(show_name: str) -> ErrorMessages:
    """Error messages for an episode listing.

    Episode errors are shown inline, so headline and image stay blank.
    """
    return ErrorMessages(
        not_found=ErrorMessage("", f"No episodes were found for '{show_name}'. <br>", ""),
        not_ok=ErrorMessage("", f"Episode listing for '{show_name}' was not successful. <br>", ""),
        unexpected=ErrorMessage("", f" <br>Episode listing for '{show_name}' was not performed.", ""),
    )


def encode_query(query: str) -> str:
    """Drop quote characters and percent-encode the rest (space becomes %20)."""
    cleaned = query.replace("'", "").replace('"', "")
    return quote(cleaned, safe="")


# =============================================================================
# TVmaze Client
# =============================================================================


class TVMazeClient:
    """Async client for the TVmaze API.

    Example:
        async with TVMazeClient() as client:
            result = await client.search_shows("batman")
            if not result.is_error:
                show = result.records[0]
                episodes = await client.get_episodes(show.id, show.name)
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """Initialize TVmaze client.

        Args:
            base_url: API base URL. Uses settings.tvmaze_base_url if None.
            timeout: Transport timeout in seconds. Uses settings.request_timeout if None.
        """
        self._base_url = (base_url or settings.tvmaze_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TVMazeClient":
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Accept": "application/json"},
        )
        return self

    async def __aexit__(
        self,
        _exc_type: Any,
        _exc_val: Any,
        _exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, ensuring it's initialized.

        Raises:
            RuntimeError: If client not initialized (not in context manager)
        """
        if self._client is None:
            raise RuntimeError("TVMazeClient must be used as async context manager")
        return self._client

    async def fetch_and_normalize(
        self,
        url: str,
        messages: ErrorMessages,
        normalizer: Normalizer,
        context_label: str,
    ) -> QueryResult:
        """GET ``url`` and turn the outcome into a QueryResult.

        Args:
            url: Fully built request URL
            messages: Texts for the nothing-found, non-200 and unexpected cases
            normalizer: Maps the non-empty payload list to records
            context_label: Query text or show name, passed to the normalizer

        Returns:
            The normalizer's result, or Failed for any transport or HTTP problem
        """
        logger.debug("tvmaze_request", url=url, context=context_label)

        try:
            response = await self.client.get(url)
            if response.status_code == SUCCESS_STATUS:
                payload = response.json()
                if not isinstance(payload, list):
                    raise ValueError(f"expected a JSON list, got {type(payload).__name__}")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("tvmaze_http_error", url=url, error=str(e))
            return Failed.from_envelope(
                build_error(
                    messages.unexpected.headline,
                    f"An unexpected error ({e}) occurred while connecting to TVmaze. "
                    f"{messages.unexpected.description}",
                    messages.unexpected.image,
                    ErrorKind.UNEXPECTED_TRANSPORT_FAULT,
                )
            )

        if response.status_code != SUCCESS_STATUS:
            logger.warning("tvmaze_bad_status", url=url, status=response.status_code)
            return Failed.from_envelope(
                build_error(
                    messages.not_ok.headline,
                    f"{messages.not_ok.description}TVmaze response code = {response.status_code}.",
                    messages.not_ok.image,
                    ErrorKind.NON_SUCCESS_STATUS,
                )
            )

        if not payload:
            logger.info("tvmaze_nothing_found", url=url, context=context_label)
            return Failed.from_envelope(
                build_error(
                    messages.not_found.headline,
                    f"{messages.not_found.description}TVmaze response code = {response.status_code}.",
                    messages.not_found.image,
                    ErrorKind.NOTHING_FOUND,
                )
            )

        logger.info("tvmaze_fetch_success", url=url, results_count=len(payload))
        return normalizer(payload, context_label)

    async def search_shows(self, query: str) -> QueryResult:
        """Search shows by name."""
        url = f"{self._base_url}/search/shows?q={encode_query(query)}"
        logger.info("tvmaze_search_shows", query=query)
        return await self.fetch_and_normalize(
            url, show_search_messages(query), normalize_shows, query
        )

    async def get_episodes(self, show_id: int, show_name: str) -> QueryResult:
        """List all episodes of a show."""
        url = f"{self._base_url}/shows/{show_id}/episodes"
        logger.info("tvmaze_get_episodes", show_id=show_id, show_name=show_name)
        return await self.fetch_and_normalize(
            url, episode_messages(show_name), normalize_episodes, show_name
        )
