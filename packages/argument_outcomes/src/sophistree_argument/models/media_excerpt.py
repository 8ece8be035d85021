"""
Media excerpts and appearances.

A MediaExcerpt is a quoted passage from a page or PDF. It is an evidentiary
leaf and is always presumed true. An Appearance records that a proposition's
text appears verbatim in an excerpt; it carries no argumentative weight but
contributes the excerpt's source metadata to the proposition.
"""

from typing import Literal, Optional

from pydantic import Field

from sophistree_argument.models.base import BaseEntity, WireModel
from sophistree_argument.urls import extract_hostname


class UrlInfo(WireModel):
    """Where an excerpt was captured."""

    url: str = Field(..., description="Address of the page the excerpt was taken from")
    canonical_url: Optional[str] = Field(None, description="Canonical URL declared by the page")
    pdf_fingerprint: Optional[str] = Field(None, description="Fingerprint of the PDF, if any")


class MediaExcerpt(BaseEntity):
    """A quoted source passage."""

    type: Literal["MediaExcerpt"] = "MediaExcerpt"
    quotation: str = Field("", description="Verbatim quoted text")
    source_name: str = Field(..., description="Display name of the source")
    domain: Optional[str] = Field(
        None, description="Domain of the source; derived from url_info when omitted"
    )
    url_info: Optional[UrlInfo] = Field(None, description="Capture location")

    @property
    def resolved_domain(self) -> str:
        """The explicit domain, else the hostname of the preferred URL."""
        if self.domain:
            return self.domain
        if self.url_info is not None:
            return extract_hostname(self.url_info)
        return ""


class Appearance(BaseEntity):
    """A proposition's text appears in an excerpt's quotation."""

    type: Literal["Appearance"] = "Appearance"
    apparition_id: str = Field(..., description="Proposition id")
    media_excerpt_id: str = Field(..., description="MediaExcerpt id")
