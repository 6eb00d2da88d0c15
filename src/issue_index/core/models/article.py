"""Article data models for issue processing."""

from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from .validators import to_str, to_list, normalize


class ArticleBlock(BaseModel):
    """The raw text of one article and of its embedded reference section."""

    model_config = ConfigDict(frozen=True)

    article_text: str = Field(..., description="Text of the article, from the end of the previous block up to '<<<'.")
    reference_text: str = Field("", description="Text between '<<<' and '>>>'; empty when the article has none.")


class ArticleRecord(BaseModel):
    """Structured fields extracted from one article block.

    `affiliations` is aligned one-to-one with the authors in `authors`;
    unresolved slots hold empty strings.
    """

    model_config = ConfigDict(frozen=True)

    title: Annotated[str, BeforeValidator(to_str), AfterValidator(normalize)] = Field(
        "", description="Title of the article."
    )
    abstract: Annotated[str, BeforeValidator(to_str)] = Field("", description="Abstract text.")
    keywords: Annotated[str, BeforeValidator(to_str)] = Field("", description="Raw keywords block.")
    authors: Annotated[str, BeforeValidator(to_str)] = Field(
        "", description="Author names without footnote markers, joined with ', '."
    )
    affiliations: Annotated[List[str], BeforeValidator(to_list)] = Field(
        default_factory=list, description="One affiliation per author, in author order."
    )
    pages: Annotated[str, BeforeValidator(to_str)] = Field("", description="Page range as 'NNN-NNN', or empty.")
    doi: Annotated[str, BeforeValidator(to_str)] = Field("", description="DOI of the article, or empty.")
    references: Annotated[List[str], BeforeValidator(to_list)] = Field(
        default_factory=list, description="Raw citation strings in source order."
    )

    @property
    def author_list(self) -> List[str]:
        if not self.authors:
            return []
        return self.authors.split(", ")
