"""Decoding of issue DOIs handed to the catalog and numbering collaborators."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

# DOI journal code -> short journal name used by the publisher's catalog
JOURNAL_CODES = {
    "euroasentj": "EEJ",
    "rusentj": "REJ",
    "invertzool": "IZ",
    "arthsel": "AS",
}

_ISSUE_DOI = re.compile(r"^(?:(?P<prefix>[\d.]+)/)?(?P<journal>[a-z]+)\.(?P<volume>\d+)\.(?P<issue>\d+)\.(?P<article>\d+)$")


class IssueDoi(BaseModel):
    """Parts of a DOI such as `10.15298/euroasentj.24.01.01`."""

    model_config = ConfigDict(frozen=True)

    prefix: Optional[str] = None
    journal_code: str
    volume: str
    issue: str
    article: str

    @property
    def journal(self) -> Optional[str]:
        return JOURNAL_CODES.get(self.journal_code)


def parse_issue_doi(doi: str) -> IssueDoi:
    """Split a `[prefix/]journal.volume.issue.article` DOI into its parts.

    Leading zeros are dropped from volume and issue (`24.01` -> `24`, `1`).

    Raises:
        ValueError: If the DOI is empty or does not follow that layout.
    """
    if not doi or not doi.strip():
        raise ValueError("DOI is empty")
    match = _ISSUE_DOI.match(doi.strip())
    if match is None:
        raise ValueError(
            f"Invalid DOI format: {doi}. Expected [prefix/]journal.volume.issue.article "
            "(e.g., 10.15298/euroasentj.24.01.01)"
        )
    return IssueDoi(
        prefix=match.group("prefix"),
        journal_code=match.group("journal"),
        volume=match.group("volume").lstrip("0") or "0",
        issue=match.group("issue").lstrip("0") or "0",
        article=match.group("article"),
    )
