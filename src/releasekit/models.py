"""Shared domain models for releasekit."""

from dataclasses import dataclass, field
from typing import Mapping

from .constants import RELEASE_STATUS_COMPLETED


@dataclass(frozen=True)
class UploadConfiguration:
    """Inputs for a single upload run, resolved once at startup."""

    package_name: str
    bundle_path: str
    service_account_key_path: str
    track: str
    release_notes: Mapping[str, str] = field(default_factory=dict)
    release_status: str = RELEASE_STATUS_COMPLETED


@dataclass(frozen=True)
class UploadResult:
    edit_id: str
    version_code: int
    track: str
