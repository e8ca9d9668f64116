"""Orchestrator: config -> every boundary document on disk.

Traversal is a plain nested loop over the registry (country, then each
province with its cities and their counties), one request at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .areas import COUNTRY_CODE, AreaRegistry, load_registry
from .config import DownloadConfig
from .console import Console
from .data import Fetcher, FetchError
from .paths import resolve, sibling_tags
from .progress import ProgressReporter, Renderer, make_renderer


@dataclass
class DownloadResult:
    total: int = 0
    succeeded: int = 0
    failed: list[tuple[str, str]] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return self.succeeded + len(self.failed)


class BoundaryDownloader:
    def __init__(self, config: DownloadConfig, fetcher: Fetcher | None = None,
                 console: Console | None = None, renderer: Renderer | None = None):
        self.config = config
        self.fetcher = fetcher if fetcher is not None else Fetcher(config)
        self.console = console if console is not None else Console(color=config.color)
        self.renderer = renderer
        self.registry: AreaRegistry | None = None
        self.result = DownloadResult()
        self._county_tags: dict[str, str] = {}
        self._city_tags: dict[str, str] = {}
        self._province_tags: dict[str, str] = {}

    def run(self) -> DownloadResult:
        """Download everything. A registry failure raises FetchError; item failures do not."""
        config = self.config
        console = self.console
        console.banner("China boundary map downloader")

        for directory in config.directories:
            directory.mkdir(parents=True, exist_ok=True)

        console.info("Fetching area index...")
        try:
            registry = load_registry(self.fetcher, config)
        except FetchError as exc:
            console.failure(f"Could not load area index {console.paint(exc.url, 'cyan')}: {exc.message}")
            raise
        console.success(f"Area index saved to {config.info_path}")
        self.registry = registry
        self._plan_tags(registry)

        provinces = registry.provinces()
        self.result.total = registry.total_work_units()
        console.info(f"{console.paint(str(self.result.total), 'yellow')} map files to download")
        console.info(f"{console.paint(str(len(provinces)), 'yellow')} provincial-level areas\n")

        self._download_country()
        for province_code in provinces:
            self._download_province(province_code)

        console.done("All map data downloaded!")
        if self.result.failed:
            console.info(f"{len(self.result.failed)} of {self.result.attempted} downloads failed")
        return self.result

    def _plan_tags(self, registry: AreaRegistry) -> None:
        args = (self.config.name_format, self.config.disambiguate_names)
        provinces = registry.provinces()
        cities = [c for p in provinces for c in registry.cities_of(p)]
        counties = [c for city in cities for c in registry.counties_of(city)]
        self._province_tags = sibling_tags(registry, provinces, *args)
        self._city_tags = sibling_tags(registry, cities, *args)
        self._county_tags = sibling_tags(registry, counties, *args)

    def _destination(self, code: str, directory: Path, tags: dict[str, str]) -> Path:
        info = self.registry.get(code)
        return directory / resolve(code, info, self.config.name_format, tags.get(code, ""))

    def _fetch(self, code: str, destination: Path) -> bool:
        url = self.config.url_for(code)
        try:
            self.fetcher.fetch_and_store(url, destination)
        except FetchError as exc:
            self.console.failure(f"Download failed: {self.console.paint(exc.url, 'cyan')} {exc.message}")
            self.result.failed.append((exc.url, exc.message))
            return False
        self.result.succeeded += 1
        self.result.written.append(destination)
        return True

    def _download_country(self) -> None:
        destination = self._destination(COUNTRY_CODE, self.config.output_dir, {})
        if self._fetch(COUNTRY_CODE, destination):
            self.console.success(f"Downloaded {self.console.paint(str(destination), 'cyan')}")
        self.console.step("National map done\n")

    def _download_province(self, province_code: str) -> None:
        registry = self.registry
        config = self.config
        console = self.console
        name = registry.name_of(province_code)
        total = registry.province_total(province_code)

        console.step(f"Processing {console.paint(name, 'bright')}")
        console.info(f"{console.paint(str(total), 'yellow')} map files to download")
        renderer = self.renderer if self.renderer is not None else make_renderer(console.stream, console.color)
        progress = ProgressReporter(name, total, renderer)

        self._fetch(province_code, self._destination(province_code, config.province_dir, self._province_tags))
        progress.advance("省级地图")

        for city_code in registry.cities_of(province_code):
            self._fetch(city_code, self._destination(city_code, config.city_dir, self._city_tags))
            progress.advance(f"市级: {registry.name_of(city_code)}")

            for county_code in registry.counties_of(city_code):
                self._fetch(county_code, self._destination(county_code, config.county_dir, self._county_tags))
                progress.advance(f"县区: {registry.name_of(county_code)}")

        progress.finish()
        console.success(f"{console.paint(name, 'bright')} finished!\n")


def download(config: DownloadConfig) -> DownloadResult:
    """Run a full download with default HTTP session and terminal output."""
    with Fetcher(config) as fetcher:
        return BoundaryDownloader(config, fetcher=fetcher).run()
