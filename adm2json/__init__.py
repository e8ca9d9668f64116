"""adm2json — China administrative boundaries to a local GeoJSON tree."""

from .config import DownloadConfig
from .pipeline import BoundaryDownloader, DownloadResult, download

__all__ = ["BoundaryDownloader", "DownloadConfig", "DownloadResult", "download"]
