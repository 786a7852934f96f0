"""
Checkfile I/O — YAML parsing, serialization and remote indirection.

Parsing is strict: YAML errors, unknown keys and wrong types all raise
CheckfileSchemaError. A checkfile carrying `validate.url` is replaced by the
document at that URL, fetched once; a `url` in the fetched document is not
followed.
"""

from __future__ import annotations

import logging

import httpx
import yaml
from pydantic import ValidationError

from modgate.config import settings
from modgate.core.errors import CheckfileSchemaError, RemoteCheckfileError
from modgate.models.checkfile_models import Check, Validation

logger = logging.getLogger("modgate.checkfile")

CHECKFILE_HEADER = (
    "# For more information about other checkfile options, see the "
    "project README section on checkfiles"
)


def parse_checkfile(text: str | bytes) -> Validation:
    """Parse a checkfile document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CheckfileSchemaError(f"Checkfile is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise CheckfileSchemaError("Checkfile must be a mapping with a `validate` key")

    try:
        return Validation.model_validate(data)
    except ValidationError as e:
        raise CheckfileSchemaError(f"Invalid checkfile: {e}") from e


def rules_to_data(rules: Check) -> dict:
    return rules.model_dump(mode="json", exclude_none=True, by_alias=True)


def dump_rules(rules: Check) -> str:
    """Serialize the `validate` body only; used to compare two checkfiles."""
    return yaml.safe_dump(rules_to_data(rules), sort_keys=False)


def dump_checkfile(validation: Validation, header: bool = False) -> str:
    body = yaml.safe_dump(
        validation.model_dump(mode="json", exclude_none=True, by_alias=True),
        sort_keys=False,
    )
    if header:
        return f"{CHECKFILE_HEADER}\n{body}"
    return body


async def fetch_remote(url: str, client: httpx.AsyncClient | None = None) -> Validation:
    """Fetch and parse the checkfile at `url`."""
    logger.info(f"Fetching validation schema from URL: {url}")
    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=settings.remote_checkfile_timeout)

    try:
        resp = await http.get(url)
    except httpx.HTTPError as e:
        raise RemoteCheckfileError(
            f"Failed to make request for remote validation schema: {url}: {e}"
        ) from e
    finally:
        if owns_client:
            await http.aclose()

    if not resp.is_success:
        raise RemoteCheckfileError(
            f"Failed to make request for remote validation schema: {url} "
            f"(status {resp.status_code})"
        )

    return parse_checkfile(resp.content)


async def resolve_remote(
    validation: Validation, client: httpx.AsyncClient | None = None
) -> Validation:
    """Follow `validate.url` once, if set."""
    url = validation.check.url
    if url is None:
        return validation

    remote = await fetch_remote(url, client)
    if remote.check.url is not None:
        logger.warning(
            f"Remote checkfile at {url} sets `url` again ({remote.check.url}); not following"
        )
    return remote
