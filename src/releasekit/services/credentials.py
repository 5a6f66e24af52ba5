"""Service account credential loading for the Play publishing API."""

import json
from typing import Any, Dict

from google.auth import crypt
from google.oauth2 import service_account

from releasekit.constants import ANDROID_PUBLISHER_SCOPE, GOOGLE_TOKEN_URI
from releasekit.errors import ReleaseError
from releasekit.errors_catalog import actionable_error

REQUIRED_FIELDS = ("client_email", "private_key")


def read_service_account_info(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as file_obj:
            info = json.load(file_obj)
    except (OSError, json.JSONDecodeError) as exc:
        raise ReleaseError(
            actionable_error("invalid_service_account", path=path, reason=str(exc))
        ) from exc

    if not isinstance(info, dict):
        raise ReleaseError(
            actionable_error(
                "invalid_service_account", path=path, reason="expected a JSON object"
            )
        )

    missing = [name for name in REQUIRED_FIELDS if not info.get(name)]
    if missing:
        raise ReleaseError(
            actionable_error(
                "invalid_service_account",
                path=path,
                reason=f"missing field(s): {', '.join(missing)}",
            )
        )
    return info


def load_service_account_credentials(path: str, scope: str = ANDROID_PUBLISHER_SCOPE):
    """Build JWT service account credentials scoped to a single publishing scope."""
    info = read_service_account_info(path)

    try:
        signer = crypt.RSASigner.from_service_account_info(info)
    except ValueError as exc:
        raise ReleaseError(
            actionable_error("invalid_service_account", path=path, reason=str(exc))
        ) from exc

    return service_account.Credentials(
        signer,
        info["client_email"],
        info.get("token_uri") or GOOGLE_TOKEN_URI,
        scopes=[scope],
        project_id=info.get("project_id"),
    )
