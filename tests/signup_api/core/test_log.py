import logging

from signup_api.core import log


def _flush() -> None:
    for handler in log._installed_handlers:
        handler.flush()


def test_configure_logging_writes_one_file_per_level(tmp_path, restore_root_logger) -> None:
    log_dir = tmp_path / 'logs'
    log.configure_logging(log_dir, 'DEBUG')
    logger = logging.getLogger('signup_api.test')

    logger.error('store is gone')
    logger.info('user registered')
    _flush()

    assert sorted(path.name for path in log_dir.iterdir()) == ['debug.log', 'error.log', 'info.log', 'warn.log']
    assert 'store is gone' in (log_dir / 'error.log').read_text()
    assert 'user registered' not in (log_dir / 'error.log').read_text()
    assert 'user registered' not in (log_dir / 'warn.log').read_text()
    assert 'user registered' in (log_dir / 'info.log').read_text()
    assert 'user registered' in (log_dir / 'debug.log').read_text()


def test_configure_logging_twice_does_not_duplicate_handlers(tmp_path, restore_root_logger) -> None:
    root = logging.getLogger()
    log.configure_logging(tmp_path, 'INFO')
    handler_count = len(root.handlers)

    log.configure_logging(tmp_path, 'INFO')

    assert len(root.handlers) == handler_count


def test_unknown_level_falls_back_to_info(tmp_path, restore_root_logger) -> None:
    log.configure_logging(tmp_path, 'chatty')

    assert logging.getLogger().level == logging.INFO
