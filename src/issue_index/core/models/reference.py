"""Parsed reference data model."""

from enum import Enum
from typing import Annotated, Tuple

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from .validators import to_str, normalize

NOT_MENTIONED = "Not mentioned"


class ReferenceType(str, Enum):
    """Kind of publication a citation points to, guessed from its text."""

    ARTICLE = "article"
    BOOK = "book"
    CHAPTER = "chapter"
    ONLINE = "online"
    OTHER = "other"


class ParsedReference(BaseModel):
    """One citation split into authors, year, title and raw publication metadata.

    `authors` and `year` hold `NOT_MENTIONED` when the citation has no author
    block or no year. `meta` is kept as written, it is never parsed further.
    """

    model_config = ConfigDict(frozen=True)

    authors: Annotated[str, BeforeValidator(to_str), AfterValidator(normalize)] = Field(
        NOT_MENTIONED, description="Author list as written, or 'Not mentioned'."
    )
    year: Annotated[str, BeforeValidator(to_str)] = Field(
        NOT_MENTIONED, description="Four-digit publication year, or 'Not mentioned'."
    )
    title: Annotated[str, BeforeValidator(to_str), AfterValidator(normalize)] = Field(
        "", description="Title of the cited work."
    )
    meta: Annotated[str, BeforeValidator(to_str), AfterValidator(normalize)] = Field(
        "", description="Trailing publication metadata (journal, publisher, pages, URL...)."
    )
    reference_type: ReferenceType = Field(
        ReferenceType.OTHER, description="Publication kind detected from the text after the year."
    )

    @property
    def has_year(self) -> bool:
        return self.year != NOT_MENTIONED

    def as_tuple(self) -> Tuple[str, str, str, str]:
        return self.authors, self.year, self.title, self.meta
