"""Configuration loader for releasekit."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from releasekit.errors import ReleaseError

# Expected YAML type for every accepted key.
_KEY_TYPES = {
    "package_name": str,
    "service_account_key": str,
    "bundle": str,
    "track": str,
    "release_notes_dir": str,
    "release_notes_locales": list,
    "verbose": bool,
    "log_file": str,
}


class ConfigLoader:
    """Reads `.releasekit.yml` defaults for the upload command."""

    SUPPORTED_KEYS = frozenset(_KEY_TYPES)

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        document = self._parse(Path(config_path))
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ReleaseError(f"Config file '{config_path}' must contain a YAML mapping at the root.")

        self._check_keys(document)
        self._check_types(document)
        return document

    def _parse(self, path: Path):
        if not path.is_file():
            raise ReleaseError(f"Config file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as stream:
                return yaml.safe_load(stream)
        except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
            raise ReleaseError(f"Invalid config file '{path}': {exc}") from exc

    def _check_keys(self, document: Dict[str, Any]):
        unknown = sorted(str(key) for key in document if key not in self.SUPPORTED_KEYS)
        if unknown:
            raise ReleaseError(f"Unknown configuration keys: {', '.join(unknown)}")

    @staticmethod
    def _check_types(document: Dict[str, Any]):
        for key, value in document.items():
            if value is None:
                continue
            expected = _KEY_TYPES[key]
            if not isinstance(value, expected):
                raise ReleaseError(
                    f"`{key}` must be a {expected.__name__}, got {type(value).__name__}."
                )

        locales = document.get("release_notes_locales")
        if locales is not None and not all(isinstance(item, str) for item in locales):
            raise ReleaseError("`release_notes_locales` must be a list of locale codes.")
