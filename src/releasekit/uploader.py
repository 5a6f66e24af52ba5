import logging
import os
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console

from .errors import ReleaseError
from .errors_catalog import actionable_error
from .models import UploadConfiguration, UploadResult
from .services.credentials import load_service_account_credentials
from .services.publisher import PublisherClient, build_publisher_service
from .services.release_notes import ReleaseNotesService

console = Console()
logger = logging.getLogger("releasekit")


def default_publisher_factory(config: UploadConfiguration) -> PublisherClient:
    credentials = load_service_account_credentials(config.service_account_key_path)
    service = build_publisher_service(credentials)
    return PublisherClient(service=service, package_name=config.package_name, logger=logger)


class ReleaseUploader:
    """Uploads a signed bundle to a Play track through one edit session."""

    def __init__(
        self,
        config: UploadConfiguration,
        publisher_factory: Optional[Callable[[UploadConfiguration], Any]] = None,
    ):
        self.config = config
        self.publisher_factory = publisher_factory or default_publisher_factory
        self.current_step_name: Optional[str] = None

    def _run_step(self, name: str, callback, *args, **kwargs):
        logger.debug("Step started: %s", name)
        self.current_step_name = name
        result = callback(*args, **kwargs)
        logger.debug("Step finished: %s", name)
        self.current_step_name = None
        return result

    def check_preconditions(self):
        if not os.path.isfile(self.config.bundle_path):
            raise ReleaseError(actionable_error("bundle_not_found", path=self.config.bundle_path))

        if not os.path.isfile(self.config.service_account_key_path):
            raise ReleaseError(
                actionable_error(
                    "service_account_not_found",
                    path=self.config.service_account_key_path,
                )
            )

    def read_bundle(self) -> bytes:
        try:
            with open(self.config.bundle_path, "rb") as file_obj:
                return file_obj.read()
        except OSError as exc:
            raise ReleaseError(f"Could not read AAB file {self.config.bundle_path}: {exc}") from exc

    def build_releases(self, version_code: int) -> List[Dict[str, Any]]:
        return [
            {
                "versionCodes": [version_code],
                "status": self.config.release_status,
                "releaseNotes": ReleaseNotesService.build_release_notes(self.config.release_notes),
            }
        ]

    def upload(self) -> UploadResult:
        self._run_step("check_preconditions", self.check_preconditions)

        publisher = self._run_step("authenticate", self.publisher_factory, self.config)

        edit_id = self._run_step("create_edit", publisher.insert_edit)
        console.print(f"Created edit with ID: {edit_id}")
        logger.info("Created edit with ID: %s", edit_id)

        console.print("[blue]Uploading AAB file...[/blue]")
        payload = self._run_step("read_bundle", self.read_bundle)
        version_code = self._run_step("upload_bundle", publisher.upload_bundle, edit_id, payload)
        console.print(f"Uploaded AAB with version code: {version_code}")
        logger.info("Uploaded AAB with version code: %s", version_code)

        releases = self._run_step("build_release_notes", self.build_releases, version_code)

        console.print(f"[blue]Updating the {self.config.track} track...[/blue]")
        self._run_step("update_track", publisher.update_track, edit_id, self.config.track, releases)

        console.print("[blue]Committing changes...[/blue]")
        self._run_step("commit_edit", publisher.commit_edit, edit_id)

        return UploadResult(edit_id=edit_id, version_code=version_code, track=self.config.track)

    def run(self) -> int:
        console.print("[bold blue]Starting upload to Google Play Store...[/bold blue]")
        console.print(f"Package: {self.config.package_name}")
        console.print(f"Track: {self.config.track}")
        console.print(f"AAB Path: {self.config.bundle_path}")
        logger.info(
            "Uploading %s to track '%s' of %s",
            self.config.bundle_path,
            self.config.track,
            self.config.package_name,
        )

        try:
            self.upload()
        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except ReleaseError as exc:
            console.print("[bold red]Error uploading to Google Play Store:[/bold red]")
            console.print(str(exc), markup=False)
            if exc.payload is not None:
                console.print(exc.payload, markup=False)
            logger.error("Step '%s' failed: %s", self.current_step_name or "run", exc)
            return 1
        except Exception as exc:
            console.print("[bold red]Unexpected error:[/bold red]")
            console.print(str(exc), markup=False)
            logger.exception("Unexpected error during step '%s'", self.current_step_name or "run")
            return 1

        console.print("[green]Upload to Google Play Store completed successfully![/green]")
        logger.info("Upload completed")
        return 0
