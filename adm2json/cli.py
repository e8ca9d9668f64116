"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import DownloadConfig
from .console import Console
from .data import Fetcher, FetchError
from .pipeline import BoundaryDownloader

log = logging.getLogger("adm2json")


def build_parser() -> argparse.ArgumentParser:
    defaults = DownloadConfig()
    parser = argparse.ArgumentParser(
        prog="adm2json",
        description="Download China's administrative boundary GeoJSON (country, provinces, cities, counties)",
    )
    parser.add_argument("-o", "--output-dir", type=Path, default=defaults.output_dir,
                        help="Directory that receives info.json, china.json and the level folders")
    parser.add_argument("--name-format", choices=["adcode", "chinese"], default=defaults.name_format,
                        help="Name files by area code or by Chinese area name")
    parser.add_argument("--base-url", default=defaults.base_url,
                        help="Prefix for per-area boundary documents")
    parser.add_argument("--info-url", default=defaults.info_url,
                        help="URL of the area index document")
    parser.add_argument("--delay", type=float, default=defaults.request_delay,
                        help="Seconds to pause after each request")
    parser.add_argument("--timeout", type=float, default=defaults.timeout,
                        help="Per-request timeout in seconds")
    parser.add_argument("--disambiguate", action="store_true",
                        help="In chinese mode, append _<adcode> to names shared by several areas")
    parser.add_argument("--no-color", action="store_true", help="Plain output without ANSI colours")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    return parser


def config_from_args(args: argparse.Namespace) -> DownloadConfig:
    return DownloadConfig(
        name_format=args.name_format,
        output_dir=args.output_dir,
        base_url=args.base_url,
        info_url=args.info_url,
        request_delay=args.delay,
        timeout=args.timeout,
        disambiguate_names=args.disambiguate,
        color=not args.no_color,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    config = config_from_args(args)
    console = Console(color=config.color)

    try:
        with Fetcher(config) as fetcher:
            BoundaryDownloader(config, fetcher=fetcher, console=console).run()
    except FetchError:
        # Already reported by the downloader; nothing else can run without the index.
        return 1
    except Exception:
        log.exception("Unhandled error, aborting")
        console.failure("Unhandled error, aborting")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
