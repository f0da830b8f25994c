"""
Pydantic models for the PDF Lambda request and response.

These models define the event payload accepted by the handler and the
response returned to the Lambda runtime.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageType(str, Enum):
    """
    wkhtmltopdf page object type. The value is the token passed on the command line.

    CONTENT emits "page" rather than "content": wkhtmltopdf only knows the
    object keywords cover, toc and page, and would treat "content" as an
    input URL. "content" is still accepted as an alias on input.
    """

    COVER = "cover"
    CONTENT = "page"
    TOC = "toc"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "PageType":
        """
        Parse a page type from its token, member name or a known alias.

        Matching is case-insensitive, so "Cover", "TOC" and "content" all resolve.
        """
        key = value.strip().lower().replace("-", "_")
        if key in _PAGE_TYPE_ALIASES:
            return _PAGE_TYPE_ALIASES[key]
        raise ValueError(f"Unknown page type: {value}")


_PAGE_TYPE_ALIASES = {
    "cover": PageType.COVER,
    "page": PageType.CONTENT,
    "content": PageType.CONTENT,
    "toc": PageType.TOC,
    "table_of_contents": PageType.TOC,
    "tableofcontents": PageType.TOC,
}


class PdfOption(BaseModel):
    """A wkhtmltopdf command-line switch, e.g. --page-size A4."""

    name: str = Field(..., description="Switch name, passed through verbatim")
    value: Optional[str] = Field(None, description="Switch value; omitted for boolean flags")


class Page(BaseModel):
    """One document (or generated section) in the output PDF."""

    model_config = ConfigDict(populate_by_name=True)

    page_type: PageType = Field(PageType.CONTENT, alias="pageType")
    html_url: Optional[str] = Field(None, alias="htmlUrl", description="Remote page URL")
    html_base64: Optional[str] = Field(
        None, alias="htmlBase64", description="Base64 encoded HTML document"
    )
    options: List[PdfOption] = Field(default_factory=list, description="Page-local options")

    @field_validator("page_type", mode="before")
    @classmethod
    def normalize_page_type(cls, v):
        """Accept aliases such as 'content' or 'TOC'."""
        if isinstance(v, str) and not isinstance(v, PageType):
            return PageType.parse(v)
        return v


class S3Details(BaseModel):
    """Where the rendered PDF is written."""

    model_config = ConfigDict(populate_by_name=True)

    bucket: str
    object_key: str = Field(..., alias="objectKey")
    region: Optional[str] = Field(None, description="Overrides the default region")


class PdfRequest(BaseModel):
    """Lambda event payload describing a conversion."""

    pages: List[Page] = Field(default_factory=list, description="Pages in render order")
    options: List[PdfOption] = Field(default_factory=list, description="Global options")
    output: S3Details


class PdfResponse(BaseModel):
    """Outcome of a conversion, returned to the Lambda runtime."""

    success: bool = False
    messages: List[str] = Field(default_factory=list)
