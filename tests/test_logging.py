import logging

from segment_league.core.logging import PACKAGE_LOGGER, get_logger


def _league_handlers(logger):
    return [handler for handler in logger.handlers if getattr(handler, "_is_league_stream", False)]


def test_module_loggers_share_one_package_handler():
    first = get_logger("segment_league.services.scoring")
    second = get_logger("segment_league.services.scoring")
    other = get_logger("segment_league.services.storage")
    package = logging.getLogger(PACKAGE_LOGGER)

    assert first is second
    assert _league_handlers(first) == []
    assert _league_handlers(other) == []
    assert len(_league_handlers(package)) == 1
    assert package.propagate is False


def test_records_reach_the_package_handler_once():
    package = logging.getLogger(PACKAGE_LOGGER)
    seen = []

    class Collect(logging.Handler):
        def emit(self, record):
            seen.append(record.getMessage())

    collector = Collect()
    package.addHandler(collector)
    try:
        get_logger("segment_league.services.season").error("week %s skipped", 3)
    finally:
        package.removeHandler(collector)

    assert seen == ["week 3 skipped"]
