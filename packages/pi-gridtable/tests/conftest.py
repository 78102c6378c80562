import pytest

from pi.gridtable.config import FIXED_MARGIN_ENV, TARGET_WIDTH_ENV, GridTableConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the caller's GRID_TABLE_* settings out of the tests."""
    monkeypatch.delenv(TARGET_WIDTH_ENV, raising=False)
    monkeypatch.delenv(FIXED_MARGIN_ENV, raising=False)


@pytest.fixture
def narrow_config() -> GridTableConfig:
    """Target width 20, margin 2: small enough to write tables out by hand."""
    return GridTableConfig(target_inner_width=20, fixed_column_margin=2)
