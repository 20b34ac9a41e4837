"""
Logging of deductions. Techniques log through module loggers placed under the
package logger; the driver applies a LogConfig to the package logger.
"""


import logging
import sys


TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

PACKAGE_LOGGER = 'sudoelim'

LEVELS = {
    'fatal': logging.CRITICAL,
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG,
    'trace': TRACE,
}


class LogConfig:
    def __init__(self, level='info', print_level=False):
        if level not in LEVELS:
            raise ValueError(f'unknown log level: {level}')
        self.level = level
        self.print_level = print_level

    def __repr__(self):
        return f'LogConfig(level={self.level!r}, print_level={self.print_level})'


def configure_logging(config, stream=None):
    """Apply config to the package logger. Handlers installed by a previous
    call are replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(LEVELS[config.level])
    for handler in list(logger.handlers):
        if getattr(handler, 'sudoelim', False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.sudoelim = True
    fmt = '%(levelname)s: %(message)s' if config.print_level else '%(message)s'
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger


def format_changed(changed):
    """r1c3#5, r2c7#5 from a list of (row, col, digit)
    """
    return ', '.join(f'r{irow + 1}c{icol + 1}#{digit}' for irow, icol, digit in sorted(changed))
