"""Actionable error catalog for releasekit."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "bundle_not_found": {
        "what": "AAB file not found at {path}",
        "next": "Build the release bundle first or pass its path as the first argument.",
    },
    "service_account_not_found": {
        "what": "Service account key file not found at {path}",
        "next": "Provide a valid service account key file via `--service-account-key` "
        "or the PLAY_STORE_SERVICE_ACCOUNT_PATH environment variable.",
    },
    "invalid_service_account": {
        "what": "Invalid service account key file '{path}': {reason}",
        "next": "Download a fresh JSON key for the service account from the Google Cloud console.",
    },
    "release_notes_not_found": {
        "what": "Release notes for locale {locale} not found at {path}",
        "next": "Create the file or adjust `--release-notes-dir` / `--locale`.",
    },
    "podfile_unreadable": {
        "what": "Could not read Podfile at {path}: {reason}",
        "next": "Run `flutter pub get` or `pod install` from the ios directory to generate it.",
    },
    "remote_call_failed": {
        "what": "Play Store call '{call}' failed: {reason}",
        "next": "Check the service account permissions in Play Console and the package name.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
