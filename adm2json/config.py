"""Configuration model for the boundary download run."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DATAV_BASE_URL = "https://geo.datav.aliyun.com/areas_v3/bound/"
DATAV_INFO_URL = DATAV_BASE_URL + "infos.json"

PROVINCE_DIRNAME = "province"
CITY_DIRNAME = "citys"
COUNTY_DIRNAME = "county"


class DownloadConfig(BaseModel):
    name_format: Literal["adcode", "chinese"] = "adcode"
    output_dir: Path = Path(".")
    base_url: str = DATAV_BASE_URL
    info_url: str = DATAV_INFO_URL
    request_delay: float = Field(default=0.2, ge=0)  # seconds, after every fetch
    timeout: float = Field(default=60, gt=0)
    user_agent: str = "adm2json/boundary-downloader"
    disambiguate_names: bool = False
    color: bool = True

    @property
    def info_path(self) -> Path:
        return self.output_dir / "info.json"

    @property
    def province_dir(self) -> Path:
        return self.output_dir / PROVINCE_DIRNAME

    @property
    def city_dir(self) -> Path:
        return self.output_dir / CITY_DIRNAME

    @property
    def county_dir(self) -> Path:
        return self.output_dir / COUNTY_DIRNAME

    @property
    def directories(self) -> tuple[Path, ...]:
        """Every directory a run writes into, root first."""
        return (self.output_dir, self.province_dir, self.city_dir, self.county_dir)

    def url_for(self, code: str) -> str:
        """Boundary document URL for one administrative code."""
        return f"{self.base_url}{code}.json"
