import logging

from hourse.core.logging_config import setup_logging


def test_setup_logging_quiets_sqlalchemy_engine():
    setup_logging("debug")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
