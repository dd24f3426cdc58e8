"""Data models for TVmaze shows and episodes.

Two groups of models live here:
- Raw* models validate individual entries of a TVmaze payload. They accept
  ``null`` and missing fields where TVmaze is known to send them.
- Show and Episode are the normalized records handed to the presentation layer.
"""

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Raw TVmaze payload entries
# =============================================================================


class RawImage(BaseModel):
    """Image links of a show. Either size may be missing."""

    model_config = ConfigDict(extra="ignore")

    medium: str | None = None
    original: str | None = None


class RawShow(BaseModel):
    """The ``show`` object of a search hit."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None
    summary: str | None = None
    image: RawImage | None = None


class RawShowWrapper(BaseModel):
    """One element of ``/search/shows``: ``{"score": ..., "show": {...}}``."""

    model_config = ConfigDict(extra="ignore")

    score: float | None = None
    show: RawShow


class RawEpisode(BaseModel):
    """One element of ``/shows/{id}/episodes``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None
    season: int | None = None
    number: int | None = None  # null for specials
    summary: str | None = None
    url: str | None = None


# =============================================================================
# Normalized records
# =============================================================================


class Show(BaseModel):
    """Normalized show record."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str = ""
    summary: str = ""
    image: str = Field(min_length=1)


class Episode(BaseModel):
    """Normalized episode record."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str | None = None
    season: int | None = None
    number: int | None = None
    summary: str | None = None
    url: str | None = None
