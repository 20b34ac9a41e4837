"""
Configuration file (sudoelim.ini). Command line options override file values.

[Solver]
techniques = default

[Logging]
level = info
print_level = no

[Display]
decorate = color
"""


import os
import configparser

from .logs import LogConfig


CONFIG_FILENAME = 'sudoelim.ini'

DEFAULTS = {
    'techniques': 'default',
    'level': 'info',
    'print_level': False,
    'decorate': 'color',
}


def load_config(filename=None):
    """Return a configparser with the sections used by sudoelim. A missing
    file is equivalent to an empty one.
    """
    config = configparser.ConfigParser(delimiters='=')
    config.read(filename or CONFIG_FILENAME)
    for section in ('Solver', 'Logging', 'Display'):
        if not config.has_section(section):
            config.add_section(section)
    return config


def resolve_options(options, config):
    """complete command line options with file values and defaults
    """
    if options.techniques is None:
        options.techniques = config.get('Solver', 'techniques', fallback=DEFAULTS['techniques'])
    if options.log_level is None:
        options.log_level = config.get('Logging', 'level', fallback=DEFAULTS['level'])
    if options.print_level is None:
        options.print_level = config.getboolean('Logging', 'print_level', fallback=DEFAULTS['print_level'])
    if options.decorate is None:
        options.decorate = config.get('Display', 'decorate', fallback=DEFAULTS['decorate'])
    return options


def log_config(options):
    return LogConfig(options.log_level, options.print_level)


def config_filename(options):
    if options.config and not os.path.isfile(options.config):
        raise FileNotFoundError(options.config)
    return options.config
