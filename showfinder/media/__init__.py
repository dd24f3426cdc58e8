"""Media metadata module.

Provides the TVmaze client and the records it produces. Every query returns
a QueryResult (Found or Failed) instead of raising.
"""

from showfinder.media.envelope import (
    ERROR_ID,
    ErrorEnvelope,
    ErrorKind,
    Failed,
    Found,
    QueryResult,
    build_error,
)
from showfinder.media.models import Episode, Show
from showfinder.media.normalizers import Normalizer, normalize_episodes, normalize_shows
from showfinder.media.tvmaze import (
    ErrorMessage,
    ErrorMessages,
    TVMazeClient,
    encode_query,
    episode_messages,
    show_search_messages,
)

__all__ = [
    # Results
    "ERROR_ID",
    "ErrorEnvelope",
    "ErrorKind",
    "Failed",
    "Found",
    "QueryResult",
    "build_error",
    # Records
    "Show",
    "Episode",
    # Normalizers
    "Normalizer",
    "normalize_shows",
    "normalize_episodes",
    # TVmaze
    "TVMazeClient",
    "ErrorMessage",
    "ErrorMessages",
    "encode_query",
    "show_search_messages",
    "episode_messages",
]
