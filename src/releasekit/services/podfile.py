"""CocoaPods Podfile patching for conflicting Flutter plugins."""

import logging
from typing import Optional

from rich.console import Console

from releasekit.constants import (
    DEFAULT_EXCLUDED_POD,
    DEFAULT_PODFILE,
    PODFILE_ANCHOR,
    PODFILE_PATCH_MARKER,
)
from releasekit.errors import ReleaseError
from releasekit.errors_catalog import actionable_error

PATCH_APPLIED = "applied"
PATCH_SKIPPED = "skipped"
PATCH_ANCHOR_MISSING = "anchor_missing"


def build_pre_install_hook(pod_name: str) -> str:
    """Render the `pre_install` hook that drops `pod_name` from the build config."""
    return (
        f"# Exclude {pod_name} to avoid dependency conflicts\n"
        f"{PODFILE_PATCH_MARKER}\n"
        f"  # Remove {pod_name} plugin's pod\n"
        "  installer.pod_targets.each do |pod|\n"
        f"    if pod.name == '{pod_name}'\n"
        f"      puts \"Excluding {pod_name} pod to avoid dependency conflicts\"\n"
        "      pod.define_singleton_method(:include_in_build_config?) do |*args|\n"
        "        false\n"
        "      end\n"
        "    end\n"
        "  end\n"
        "end\n"
    )


def is_patched(content: str) -> bool:
    return PODFILE_PATCH_MARKER in content


class PodfilePatcher:
    """Inserts a `pre_install` hook after the Flutter podfile setup call.

    The Podfile is treated as opaque text: the hook goes right after the first
    `flutter_ios_podfile_setup` occurrence. A file that already declares a
    `pre_install` hook is left alone, which keeps repeated runs idempotent.
    When the anchor is missing the content is written back unchanged.
    """

    def __init__(
        self,
        logger: logging.Logger,
        console: Console,
        excluded_pod: Optional[str] = None,
    ):
        self.logger = logger
        self.console = console
        self.excluded_pod = excluded_pod or DEFAULT_EXCLUDED_POD

    def _read(self, podfile_path: str) -> str:
        try:
            with open(podfile_path, "r", encoding="utf-8", newline="") as file_obj:
                return file_obj.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ReleaseError(
                actionable_error("podfile_unreadable", path=podfile_path, reason=str(exc))
            ) from exc

    def _write(self, podfile_path: str, content: str):
        try:
            with open(podfile_path, "w", encoding="utf-8", newline="") as file_obj:
                file_obj.write(content)
        except OSError as exc:
            raise ReleaseError(f"Could not write Podfile at {podfile_path}: {exc}") from exc

    def apply(self, content: str) -> str:
        replacement = f"{PODFILE_ANCHOR}\n\n{build_pre_install_hook(self.excluded_pod)}"
        return content.replace(PODFILE_ANCHOR, replacement, 1)

    def patch(self, podfile_path: str = DEFAULT_PODFILE) -> str:
        self.logger.debug("Reading Podfile: %s", podfile_path)
        content = self._read(podfile_path)

        if is_patched(content):
            message = "Podfile already contains a pre_install hook, skipping modification"
            self.console.print(f"[yellow]{message}[/yellow]")
            self.logger.info(message)
            return PATCH_SKIPPED

        modified = self.apply(content)
        self._write(podfile_path, modified)

        if modified == content:
            self.console.print(
                f"[yellow]Anchor '{PODFILE_ANCHOR}' not found, Podfile left unchanged[/yellow]"
            )
            self.logger.warning(
                "Anchor '%s' not found in %s; Podfile left unchanged.",
                PODFILE_ANCHOR,
                podfile_path,
            )
            return PATCH_ANCHOR_MISSING

        self.console.print(
            f"[green]Successfully modified Podfile to exclude {self.excluded_pod}[/green]"
        )
        self.logger.info("Patched %s to exclude pod %s", podfile_path, self.excluded_pod)
        return PATCH_APPLIED
