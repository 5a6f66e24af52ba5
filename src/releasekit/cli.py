import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler

from .constants import (
    DEFAULT_BUNDLE_PATH,
    DEFAULT_CONFIG_FILE,
    DEFAULT_EXCLUDED_POD,
    DEFAULT_PACKAGE_NAME,
    DEFAULT_PODFILE,
    DEFAULT_RELEASE_NOTES_DIR,
    DEFAULT_RELEASE_NOTES_LOCALES,
    DEFAULT_SERVICE_ACCOUNT_KEY_PATH,
    DEFAULT_TRACK,
    SERVICE_ACCOUNT_ENV_VAR,
)
from .errors import ReleaseError
from .models import UploadConfiguration
from .services.config_loader import ConfigLoader
from .services.podfile import PodfilePatcher
from .services.release_notes import ReleaseNotesService
from .uploader import ReleaseUploader


def _resolve_option(cli_value, config, key, default=None, env_var=None):
    if cli_value is not None:
        return cli_value
    if env_var and os.environ.get(env_var):
        return os.environ[env_var]
    if key in config:
        return config[key]
    return default


def _configure_logging(logger: logging.Logger, verbose: bool, log_file=None):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.argument("podfile", required=False, default=DEFAULT_PODFILE, type=click.Path())
@click.option(
    "--exclude-pod",
    default=DEFAULT_EXCLUDED_POD,
    show_default=True,
    help="Name of the plugin pod to drop from the build configuration.",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose logging")
def patch_podfile(podfile, exclude_pod, verbose):
    """Exclude a conflicting plugin pod from the Flutter-generated Podfile."""
    logger = logging.getLogger("releasekit")
    _configure_logging(logger, verbose)

    patcher = PodfilePatcher(logger=logger, console=Console(), excluded_pod=exclude_pod)
    try:
        patcher.patch(podfile)
    except ReleaseError as exc:
        raise click.ClickException(str(exc)) from exc


@click.command()
@click.argument("bundle", required=False)
@click.argument("track", required=False)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option("--package-name", required=False, help="Application id on Google Play.")
@click.option(
    "--service-account-key",
    required=False,
    type=click.Path(),
    help=f"Service account JSON key. Falls back to ${SERVICE_ACCOUNT_ENV_VAR}.",
)
@click.option(
    "--release-notes-dir",
    required=False,
    type=click.Path(),
    help="Directory holding one <locale>.txt release notes file per locale.",
)
@click.option(
    "--locale",
    "locales",
    multiple=True,
    help="Release notes locale to attach (repeatable, default: en-US).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def play_upload(
    bundle,
    track,
    config,
    package_name,
    service_account_key,
    release_notes_dir,
    locales,
    verbose,
    log_file,
):
    """Upload an app bundle to Google Play and release it on TRACK."""
    logger = logging.getLogger("releasekit")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except ReleaseError as exc:
        raise click.ClickException(str(exc)) from exc

    package_name = _resolve_option(
        package_name, config_values, "package_name", default=DEFAULT_PACKAGE_NAME
    )
    service_account_key = _resolve_option(
        service_account_key,
        config_values,
        "service_account_key",
        default=DEFAULT_SERVICE_ACCOUNT_KEY_PATH,
        env_var=SERVICE_ACCOUNT_ENV_VAR,
    )
    bundle = _resolve_option(bundle, config_values, "bundle", default=DEFAULT_BUNDLE_PATH)
    track = _resolve_option(track, config_values, "track", default=DEFAULT_TRACK)
    release_notes_dir = _resolve_option(
        release_notes_dir, config_values, "release_notes_dir", default=DEFAULT_RELEASE_NOTES_DIR
    )
    locales = _resolve_option(
        list(locales) or None,
        config_values,
        "release_notes_locales",
        default=list(DEFAULT_RELEASE_NOTES_LOCALES),
    )
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    _configure_logging(logger, verbose, log_file)

    try:
        release_notes = ReleaseNotesService(logger=logger).load(release_notes_dir, locales)
    except ReleaseError as exc:
        raise click.ClickException(str(exc)) from exc

    upload_config = UploadConfiguration(
        package_name=str(package_name),
        bundle_path=str(bundle),
        service_account_key_path=str(service_account_key),
        track=str(track),
        release_notes=release_notes,
    )

    uploader = ReleaseUploader(config=upload_config)
    raise SystemExit(uploader.run())


if __name__ == "__main__":
    play_upload()
