import logging

import pytest

from egov_cms_client.logging_utils import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_handler_is_installed_once_on_the_root_logger(root_logger):
    configure_logging("debug")
    configure_logging("WARNING")

    named = [handler for handler in root_logger.handlers if handler.get_name() == "egov_cms_client.console"]
    assert len(named) == 1
    assert root_logger.level == logging.WARNING
