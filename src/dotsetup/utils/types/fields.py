"""Reusable Pydantic field annotations."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, StrictStr

type JsonDict = dict[str, object]

NonEmptyString = Annotated[StrictStr, Field(min_length=1, frozen=True)]

# Plain http(s) URL kept as a string so that "{version}" placeholders survive validation
HttpUrlString = Annotated[
    StrictStr,
    Field(
        pattern=r"^https?://\S+$",
        frozen=True,
        description="HTTP/HTTPS URL",
    ),
]

# Release version such as "9.1.0000", or "latest" to query upstream tags
VersionSpec = Annotated[
    StrictStr,
    Field(
        pattern=r"^(latest|\d+(\.\d+)*)$",
        description="Pinned version number or 'latest'",
    ),
]

__all__ = [
    "HttpUrlString",
    "JsonDict",
    "NonEmptyString",
    "VersionSpec",
]
