"""Thin wrapper around the Android Publisher v3 edits API."""

import io
import json
from typing import Any, Dict, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from releasekit.constants import (
    ANDROID_PUBLISHER_API,
    ANDROID_PUBLISHER_VERSION,
    BUNDLE_MIME_TYPE,
)
from releasekit.errors import ReleaseError
from releasekit.errors_catalog import actionable_error


def build_publisher_service(credentials):
    return build(
        ANDROID_PUBLISHER_API,
        ANDROID_PUBLISHER_VERSION,
        credentials=credentials,
        cache_discovery=False,
    )


def _decode_error_payload(content: Any) -> Optional[Any]:
    if not content:
        return None
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        return json.loads(content)
    except ValueError:
        return content


class PublisherClient:
    """Executes edit-session calls for one package and normalizes failures."""

    def __init__(self, service, package_name: str, logger):
        self.service = service
        self.package_name = package_name
        self.logger = logger

    def _execute(self, call: str, request) -> Dict[str, Any]:
        self.logger.debug("Executing Play API call: %s", call)
        try:
            return request.execute() or {}
        except HttpError as exc:
            status = getattr(exc.resp, "status", "unknown")
            raise ReleaseError(
                actionable_error("remote_call_failed", call=call, reason=f"HTTP {status}: {exc}"),
                payload=_decode_error_payload(exc.content),
            ) from exc
        except GoogleAuthError as exc:
            raise ReleaseError(
                actionable_error("remote_call_failed", call=call, reason=f"authentication failed: {exc}")
            ) from exc
        except (OSError, httplib2.HttpLib2Error) as exc:
            raise ReleaseError(
                actionable_error("remote_call_failed", call=call, reason=f"network error: {exc}")
            ) from exc

    def insert_edit(self) -> str:
        response = self._execute(
            "edits.insert",
            self.service.edits().insert(packageName=self.package_name, body={}),
        )
        edit_id = response.get("id")
        if not edit_id:
            raise ReleaseError("Play API did not return an edit id.", payload=response)
        return edit_id

    def upload_bundle(self, edit_id: str, payload: bytes) -> int:
        media = MediaIoBaseUpload(io.BytesIO(payload), mimetype=BUNDLE_MIME_TYPE, resumable=True)
        response = self._execute(
            "edits.bundles.upload",
            self.service.edits()
            .bundles()
            .upload(packageName=self.package_name, editId=edit_id, media_body=media),
        )
        version_code = response.get("versionCode")
        if version_code is None:
            raise ReleaseError("Play API did not return a version code.", payload=response)
        return version_code

    def update_track(self, edit_id: str, track: str, releases: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._execute(
            "edits.tracks.update",
            self.service.edits()
            .tracks()
            .update(
                packageName=self.package_name,
                editId=edit_id,
                track=track,
                body={"track": track, "releases": releases},
            ),
        )

    def commit_edit(self, edit_id: str) -> Dict[str, Any]:
        return self._execute(
            "edits.commit",
            self.service.edits().commit(packageName=self.package_name, editId=edit_id),
        )
