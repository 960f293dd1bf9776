from datetime import date
from pathlib import Path

import pytest

from adtracker.config import default_app_config, load_app_config


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "adtracker_config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_full_config(tmp_path) -> None:
    config_path = _write_config(
        tmp_path,
        """
[data]
offers = "exports/offers.csv"
ads = "exports/ads.csv"
expenses = "exports/expenses.csv"
recurring = "exports/recurring.csv"
projects = "exports/projects.csv"

[dashboard]
default_range = "thisMonth"
default_offer = "o1"
epoch_floor = "2023-01-01"
this_month_previous = "calendar_month"
currency = "EUR"

[display]
mode = "both"
decimals = 1

[ai]
enabled = true
model = "gpt-4o"
sample_size = 5
""",
    )

    cfg = load_app_config(str(config_path))

    assert cfg.data.offers == (tmp_path / "exports" / "offers.csv").resolve()
    assert cfg.data.projects == (tmp_path / "exports" / "projects.csv").resolve()
    assert cfg.data.tasks is None
    assert cfg.dashboard.default_range == "thisMonth"
    assert cfg.dashboard.default_offer == "o1"
    assert cfg.dashboard.epoch_floor == date(2023, 1, 1)
    assert cfg.dashboard.this_month_previous == "calendar_month"
    assert cfg.dashboard.currency == "EUR"
    assert cfg.display_mode == "both"
    assert cfg.decimals == 1
    assert cfg.ai.enabled is True
    assert cfg.ai.model == "gpt-4o"
    assert cfg.ai.sample_size == 5


def test_empty_config_uses_defaults(tmp_path) -> None:
    cfg = load_app_config(str(_write_config(tmp_path, "")))

    assert cfg.data.ads == (tmp_path / "data" / "ads.csv").resolve()
    assert cfg.dashboard.default_range == "last7days"
    assert cfg.dashboard.default_offer == "all"
    assert cfg.dashboard.epoch_floor == date(2020, 1, 1)
    assert cfg.dashboard.this_month_previous == "rolling_30_days"
    assert cfg.display_mode == "table"
    assert cfg.decimals == 2
    assert cfg.ai.enabled is False


def test_default_app_config(tmp_path) -> None:
    cfg = default_app_config(tmp_path)
    assert cfg.data.offers == (tmp_path / "data" / "offers.csv").resolve()
    assert cfg.dashboard.currency == "BRL"


@pytest.mark.parametrize(
    "content",
    [
        '[dashboard]\ndefault_range = "custom"\n',
        '[dashboard]\ndefault_range = "lastYear"\n',
        '[dashboard]\nthis_month_previous = "weekly"\n',
        '[dashboard]\nepoch_floor = "01/01/2020"\n',
        '[display]\nmode = "html"\n',
        '[ai]\nsample_size = "many"\n',
        "not = [valid toml",
    ],
)
def test_invalid_config_raises(tmp_path, content) -> None:
    with pytest.raises(ValueError):
        load_app_config(str(_write_config(tmp_path, content)))


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "nope.toml"))
