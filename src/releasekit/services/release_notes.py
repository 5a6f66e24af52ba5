"""Per-locale release notes loading."""

import os
from typing import Dict, Iterable, List, Mapping

from releasekit.errors import ReleaseError
from releasekit.errors_catalog import actionable_error


class ReleaseNotesService:
    """Reads `<locale>.txt` files and shapes them for the track update."""

    def __init__(self, logger):
        self.logger = logger

    def load(self, directory: str, locales: Iterable[str]) -> Dict[str, str]:
        notes: Dict[str, str] = {}
        for locale in locales:
            path = os.path.join(directory, f"{locale}.txt")
            try:
                with open(path, "r", encoding="utf-8", newline="") as file_obj:
                    notes[locale] = file_obj.read()
            except FileNotFoundError as exc:
                raise ReleaseError(
                    actionable_error("release_notes_not_found", locale=locale, path=path)
                ) from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise ReleaseError(f"Could not read release notes '{path}': {exc}") from exc
            self.logger.debug("Loaded %s release notes from %s", locale, path)
        return notes

    @staticmethod
    def build_release_notes(notes: Mapping[str, str]) -> List[Dict[str, str]]:
        return [{"language": locale, "text": text} for locale, text in notes.items()]
