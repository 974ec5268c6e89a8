import logging

import pytest

from xzsink.commons.logger import Adapter, base_logger
from xzsink.commons.settings import SinkSettings


@pytest.fixture
def logger():
    return Adapter(base_logger, dict(component="test"))


@pytest.fixture
def settings():
    # A leaked sink must never abort the test session.
    return SinkSettings(XZSINK_LEAK_ACTION="raise")


@pytest.fixture(autouse=True)
def sink_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="xzsink")
    return caplog
