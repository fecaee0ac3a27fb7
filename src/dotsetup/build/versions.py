"""Resolve which upstream release to build."""

from __future__ import annotations

import re

import httpx
from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import BuildError, BuildStage

logger = create_logger("build.versions")

LATEST = "latest"
_TAG_PATTERN = re.compile(r"^v?(\d+(?:\.\d+)*)$")


def resolve_version(
    spec: str,
    *,
    package: str,
    tags_url: str,
    client: httpx.Client,
) -> Result[str, BuildError]:
    """Return ``spec`` when pinned, or the newest tag listed at ``tags_url`` for "latest".

    ``tags_url`` must answer like the GitHub tags API: a JSON list of objects
    with a ``name`` such as ``"v9.1.0000"``, newest first.
    """
    if spec != LATEST:
        return Ok(spec)

    logger.debug("Querying latest tag", package=package, url=tags_url)
    try:
        response = client.get(tags_url, headers={"Accept": "application/vnd.github+json"})
        response.raise_for_status()
        tags = response.json()
    except (httpx.HTTPError, ValueError) as e:
        return Err(_error(package, f"Failed to query the latest {package} version: {e}"))

    if not isinstance(tags, list):
        return Err(_error(package, f"Unexpected response from {tags_url}"))

    for tag in tags:
        name = tag.get("name") if isinstance(tag, dict) else None
        if isinstance(name, str) and (match := _TAG_PATTERN.match(name)):
            version = match.group(1)
            logger.info("Resolved latest version", package=package, version=version)
            return Ok(version)

    return Err(_error(package, f"Could not determine the latest {package} version"))


def _error(package: str, message: str) -> BuildError:
    logger.error("Version resolution failed", package=package, error=message)
    return BuildError(package=package, stage=BuildStage.RESOLVE_VERSION, message=message)
