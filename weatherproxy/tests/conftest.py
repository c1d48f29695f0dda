"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class FakeLocator:
    """GeoLocator stub answering from a fixed ip -> English city map."""

    def __init__(self, cities: dict[str, str] | None = None):
        self.cities = cities or {}
        self.calls: list[str] = []

    def lookup_city(self, ip: str) -> str | None:
        self.calls.append(ip)
        return self.cities.get(ip)


def build_cwa_payload(
    city: str = "臺北市",
    periods: int = 4,
    codes: tuple[str, ...] = ("Wx", "PoP", "MinT", "MaxT"),
) -> dict:
    """Build a minimal F-C0032-001 document with aligned element series."""
    values = {"Wx": "晴時多雲", "PoP": "20", "MinT": "18", "MaxT": "27", "CI": "舒適", "WS": "3"}
    elements = []
    for code in codes:
        elements.append({
            "elementName": code,
            "time": [
                {
                    "startTime": f"2026-10-{16 + i:02d} 06:00:00",
                    "endTime": f"2026-10-{16 + i:02d} 18:00:00",
                    "parameter": {"parameterName": values.get(code, "x")},
                }
                for i in range(periods)
            ],
        })
    return {
        "success": "true",
        "records": {
            "datasetDescription": "三十六小時天氣預報",
            "location": [{"locationName": city, "weatherElement": elements}],
        },
    }


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def taipei_forecast() -> dict:
    with open(FIXTURE_DIR / "cwa_forecast_taipei.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def empty_forecast() -> dict:
    with open(FIXTURE_DIR / "cwa_forecast_empty.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "upstream": {"timeout_seconds": 3, "api_key": "file-key"},
        "geo": {"default_city": "高雄市"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True)
    return path
