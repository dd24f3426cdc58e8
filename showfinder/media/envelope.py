"""Error envelopes and the result union returned by every TVmaze query.

A query never raises for transport or HTTP problems. It returns either
``Found`` with the normalized records or ``Failed`` carrying an
``ErrorEnvelope``. Both expose ``records``, so a consumer that only looks at
``records[0].id == "ERROR"`` keeps working, while new code branches on the
result type instead.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from showfinder.media.models import Episode, Show

ERROR_ID = "ERROR"

ShowList = Annotated[list[Show], Field(min_length=1)]
EpisodeList = Annotated[list[Episode], Field(min_length=1)]


class ErrorKind(str, Enum):
    """Why a query produced no usable records."""

    NOTHING_FOUND = "nothing_found"
    NON_SUCCESS_STATUS = "non_success_status"
    UNEXPECTED_TRANSPORT_FAULT = "unexpected_transport_fault"
    NORMALIZATION_ANOMALY = "normalization_anomaly"


class ErrorEnvelope(BaseModel):
    """Stand-in record describing a failed query.

    Shaped like a Show (id, name, summary, image) so it renders through the
    same path. ``name`` holds the short headline, ``summary`` the description.
    """

    model_config = ConfigDict(frozen=True)

    id: Literal["ERROR"] = ERROR_ID
    name: str
    summary: str
    image: str
    kind: ErrorKind


def build_error(
    headline: str,
    description: str,
    image: str,
    kind: ErrorKind = ErrorKind.UNEXPECTED_TRANSPORT_FAULT,
) -> ErrorEnvelope:
    """Build an error envelope. Always succeeds."""
    return ErrorEnvelope(name=headline, summary=description, image=image, kind=kind)


class Found(BaseModel):
    """Successful query with at least one normalized record."""

    model_config = ConfigDict(frozen=True)

    status: Literal["found"] = "found"
    records: ShowList | EpisodeList

    @property
    def is_error(self) -> bool:
        return False


class Failed(BaseModel):
    """Query that produced no usable records."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    error: ErrorKind
    envelope: ErrorEnvelope

    @classmethod
    def from_envelope(cls, envelope: ErrorEnvelope) -> "Failed":
        """Wrap an envelope, taking the error kind from it."""
        return cls(error=envelope.kind, envelope=envelope)

    @property
    def records(self) -> list[ErrorEnvelope]:
        """The one-element sequence holding the envelope."""
        return [self.envelope]

    @property
    def is_error(self) -> bool:
        return True


QueryResult = Union[Found, Failed]
