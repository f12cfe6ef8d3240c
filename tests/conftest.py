from unittest.mock import MagicMock

import pytest

from shelfhelpers import utils
from shelfhelpers.interface import UserInterface
from shelfhelpers.logger import teardown_logging
from shelfhelpers.ui import UI


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.config/shelfhelpers/config.json."""
    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setattr(utils, "CONFIG_FILE", config_file)
    yield config_file
    teardown_logging()


@pytest.fixture
def ui():
    return UI(config={})


@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)
