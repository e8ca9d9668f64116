"""Tests for DownloadConfig defaults, validation and derived paths."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from adm2json.config import DATAV_BASE_URL, DATAV_INFO_URL, DownloadConfig


class TestDefaults:
    def test_datav_endpoints(self):
        cfg = DownloadConfig()
        assert cfg.base_url == "https://geo.datav.aliyun.com/areas_v3/bound/"
        assert cfg.info_url == DATAV_INFO_URL == DATAV_BASE_URL + "infos.json"

    def test_adcode_naming_and_200ms_delay(self):
        cfg = DownloadConfig()
        assert cfg.name_format == "adcode"
        assert cfg.request_delay == 0.2
        assert cfg.output_dir == Path(".")


class TestValidation:
    def test_unknown_name_format_rejected(self):
        with pytest.raises(ValidationError):
            DownloadConfig(name_format="pinyin")

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            DownloadConfig(request_delay=-1)

    def test_output_dir_coerced_to_path(self):
        assert DownloadConfig(output_dir="maps").output_dir == Path("maps")


class TestDerivedPaths:
    def test_level_directories(self, tmp_path):
        cfg = DownloadConfig(output_dir=tmp_path)
        assert cfg.info_path == tmp_path / "info.json"
        assert cfg.directories == (tmp_path, tmp_path / "province", tmp_path / "citys", tmp_path / "county")

    def test_url_for(self):
        cfg = DownloadConfig(base_url="https://example.test/b/")
        assert cfg.url_for("110101") == "https://example.test/b/110101.json"
