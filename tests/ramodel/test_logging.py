import logging

from ramodel.logging_config import setup_logging
from ramodel.model import Model
from ramodel.relations import Relation


def test_setup_logging_configures_package_logger(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))
    try:
        assert logger.name == "ramodel"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        # calling again does not stack handlers
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        assert len(logger.handlers) == 2
        logging.getLogger("ramodel.model").debug("hello")
        for h in logger.handlers:
            h.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def test_absorption_is_logged(abc, caplog):
    m = Model()
    m.add_relation(Relation(abc, ["A"]), True)
    with caplog.at_level(logging.DEBUG, logger="ramodel.model"):
        m.add_relation(Relation(abc, ["A", "B"]), True)
    assert any("absorbs" in rec.getMessage() for rec in caplog.records)


def test_reconfiguring_closes_previous_handlers(tmp_path):
    import io

    logger = setup_logging(logging.INFO, log_file=str(tmp_path / "first.log"), stream=io.StringIO())
    try:
        first = [h for h in logger.handlers if isinstance(h, logging.FileHandler)][0]
        assert first.stream is not None
        setup_logging(logging.INFO, stream=io.StringIO())
        assert first not in logger.handlers
        # a closed FileHandler drops its stream
        assert first.stream is None
        assert len(logger.handlers) == 1
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
