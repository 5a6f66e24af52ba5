"""Defaults shared by the release utilities."""

DEFAULT_PACKAGE_NAME = "com.elmosfurniture.app"
DEFAULT_BUNDLE_PATH = "./build/app/outputs/bundle/release/app-release.aab"
DEFAULT_SERVICE_ACCOUNT_KEY_PATH = "./service-account.json"
DEFAULT_TRACK = "production"
DEFAULT_RELEASE_NOTES_DIR = "./distribution/whatsnew"
DEFAULT_RELEASE_NOTES_LOCALES = ("en-US",)
DEFAULT_CONFIG_FILE = ".releasekit.yml"

SERVICE_ACCOUNT_ENV_VAR = "PLAY_STORE_SERVICE_ACCOUNT_PATH"

ANDROID_PUBLISHER_SCOPE = "https://www.googleapis.com/auth/androidpublisher"
ANDROID_PUBLISHER_API = "androidpublisher"
ANDROID_PUBLISHER_VERSION = "v3"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
BUNDLE_MIME_TYPE = "application/octet-stream"

RELEASE_STATUS_COMPLETED = "completed"

DEFAULT_PODFILE = "Podfile"
DEFAULT_EXCLUDED_POD = "mobile_scanner"
PODFILE_ANCHOR = "flutter_ios_podfile_setup"
PODFILE_PATCH_MARKER = "pre_install do |installer|"
