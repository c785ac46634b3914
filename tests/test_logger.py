import logging

from csvjson.logger import get_logger


def test_module_loggers_share_the_package_handler():
    child = get_logger("csvjson.session")
    get_logger("csvjson.reader")
    get_logger("csvjson.session")

    package = logging.getLogger("csvjson")
    assert child.handlers == []
    assert child.propagate is True
    assert len(package.handlers) == 1
    assert package.propagate is False
