#!/usr/bin/env python3
"""
Tests of the logging setup used by the command line entry point.
"""

import logging

from benchmarks.log_config import setup_logger


def bench_handlers(logger):
    return [h for h in logger.handlers if getattr(h, '_bench_handler', False)]


def test_console_level(restore_root_logger):
    logger = setup_logger(level=logging.WARNING)
    assert logger is logging.getLogger()
    assert logger.level == logging.WARNING
    (console,) = bench_handlers(logger)
    assert console.level == logging.WARNING


def test_verbose_sets_debug(restore_root_logger):
    logger = setup_logger(level=logging.DEBUG)
    assert logger.level == logging.DEBUG
    assert bench_handlers(logger)[0].level == logging.DEBUG


def test_repeated_setup_replaces_handlers(restore_root_logger):
    setup_logger()
    logger = setup_logger()
    assert len(bench_handlers(logger)) == 1


def test_log_file_receives_debug_records(tmp_path, restore_root_logger, capsys):
    """Test DEBUG records from library modules reach the file but not the console."""
    log_file = tmp_path / 'logs' / 'bench.log'
    logger = setup_logger(level=logging.INFO, log_file=log_file)
    assert len(bench_handlers(logger)) == 2

    logging.getLogger('harness').debug("inline: %d iterations", 3)
    logging.getLogger('benchmarks.benchmark_runner').warning("Ignoring unknown size groups: huge")
    for handler in bench_handlers(logger):
        handler.flush()

    text = log_file.read_text(encoding='utf-8')
    assert "[DEBUG] harness - inline: 3 iterations" in text
    assert "[WARNING] benchmarks.benchmark_runner - Ignoring unknown size groups: huge" in text

    console = capsys.readouterr().err
    assert "inline: 3 iterations" not in console
    assert "[WARNING] Ignoring unknown size groups: huge" in console
