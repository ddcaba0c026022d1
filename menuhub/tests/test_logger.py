"""
Tests for package logging setup
"""
import logging

from menuhub.utils.logger import LOG_FORMAT, configure_package_logging, get_logger


def test_handler_is_attached_once():
    logger = get_logger("menuhub.tests.once")
    get_logger("menuhub.tests.once")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_module_loggers_sit_under_package_logger():
    package_logger = configure_package_logging()

    assert package_logger.name == "menuhub"
    assert package_logger.level in (logging.DEBUG, logging.INFO)
    assert logging.getLogger("menuhub.services.fan_out").parent is package_logger
