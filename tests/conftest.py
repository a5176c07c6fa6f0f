import os

import pytest

from geodistance.config.settings import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    # Settings are cached process-wide; every test starts from the packaged defaults.
    for key in list(os.environ):
        if key.startswith("GEODISTANCE_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
