from .fields import HttpUrlString, JsonDict, NonEmptyString, VersionSpec

__all__ = [
    "HttpUrlString",
    "JsonDict",
    "NonEmptyString",
    "VersionSpec",
]
