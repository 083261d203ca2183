from flyfx.models.enums import LogCategory, LogLevel
from flyfx.utils.logger import Logger, configure_logger, get_category_logger, get_logger


def test_message_and_detail_tree(capsys):
    logger = Logger(use_colors=False)

    logger.info(LogCategory.SCHEDULER, "Session completed", session=3, frames=61)

    lines = capsys.readouterr().out.splitlines()
    assert "SCHEDULER" in lines[0]
    assert lines[0].endswith("✓ Session completed")
    assert lines[1].strip() == "├─ session: 3"
    assert lines[2].strip() == "└─ frames: 61"


def test_level_filter(capsys):
    logger = Logger(min_level=LogLevel.WARN, use_colors=False)

    logger.debug(LogCategory.ENGINE, "hidden")
    logger.info(LogCategory.ENGINE, "hidden too")
    logger.warn(LogCategory.ENGINE, "shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out


def test_sink_receives_flattened_details():
    records = []
    logger = Logger(use_colors=False)
    logger.set_sink(lambda ts, level, category, message: records.append((level, category, message)))

    logger.error(LogCategory.COMPLETION, "Boom", session=7)

    assert records == [("ERROR", "COMPLETION", "Boom (session: 7)")]


def test_exc_info_appends_traceback(capsys):
    logger = Logger(use_colors=False)
    try:
        raise ValueError("bad value")
    except ValueError:
        logger.error(LogCategory.SYSTEM, "Failed", exc_info=True)

    out = capsys.readouterr().out
    assert "Traceback" in out
    assert "ValueError: bad value" in out


def test_bound_logger_category_and_override():
    records = []
    get_logger().set_sink(lambda ts, level, category, message: records.append((level, category)))

    log = get_category_logger(LogCategory.EFFECT)
    log.info("one")
    log.with_category(LogCategory.STAGE).warn("two")
    log.log("three", LogLevel.INFO, category=LogCategory.CONFIG)

    assert records == [("INFO", "EFFECT"), ("WARN", "STAGE"), ("INFO", "CONFIG")]


def test_configure_logger_reaches_existing_bound_loggers(capsys):
    log = get_logger().for_category(LogCategory.ENGINE)

    configure_logger(min_level=LogLevel.ERROR, use_colors=False)
    log.warn("quiet")
    log.error("loud")

    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "loud" in out
    assert "\033[" not in out
