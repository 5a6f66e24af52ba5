"""
releasekit - Release automation for the Flutter mobile app
"""

__version__ = "0.1.0"

from .errors import ReleaseError
from .services.podfile import PodfilePatcher
from .uploader import ReleaseUploader

__all__ = ["PodfilePatcher", "ReleaseError", "ReleaseUploader"]
