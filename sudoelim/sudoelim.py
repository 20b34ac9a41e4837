"""
sudoelim command line: solve a grid or test files of grids.
"""


import argparse
import os
import sys
import time

import clipboard
import colorama

from . import testing
from .config import load_config, resolve_options, log_config, config_filename
from .grid import Grid, SudokuError
from .logs import LEVELS, configure_logging
from .solver import solve


VERSION = '0.1'


# Commands


def solvegrid(options):
    """
    Solve a single grid given on the command line, in the clipboard or
    a file.
    """
    t0 = time.time()
    grid = Grid()
    grid.decorate = options.decorate

    if options.solve == 'clipboard':
        sgrid = clipboard.paste()
    elif os.path.isfile(options.solve):
        with open(options.solve) as f:
            sgrid = f.read()
    else:
        sgrid = options.solve

    grid.input(sgrid)

    if options.output == 'clipboard':
        solve(grid, options.techniques, step=options.step)
        clipboard.copy(grid.dumpstr())
    elif options.output:
        with open(options.output, 'wt') as f:
            solve(grid, options.techniques, step=options.step)
            print(grid.dumpstr(), file=f)
            print(grid.output_s81(), file=f)
    else:
        if not options.explain:
            print(grid.output_s81())
            grid.dump()
        solve(grid, options.techniques, options.explain, options.step)
        grid.dump()
        print(grid.output_s81())

    return True, time.time() - t0


def application_error(*args):
    print('sudoelim error:', *args)
    sys.exit(1)


def parse_command_line(argstring=None):
    usage = "usage: sudoelim ..."
    parser = argparse.ArgumentParser(description=usage, usage=argparse.SUPPRESS)
    parser.add_argument('--version', action='version', version=f'sudoelim {VERSION}')
    parser.add_argument('-s', '--solve', help='solve grid in command line argument, clipboard or file',
                        action='store', default=None)
    parser.add_argument('-t', '--testfile', help='test file',
                        action='store', default=None)
    parser.add_argument('-T', '--testdir', help='test directory',
                        action='store', default=None)
    parser.add_argument('--config', help='configuration file',
                        action='store', default=None)
    parser.add_argument('--random', help='test N random grids from file',
                        type=int,
                        action='store', default=None)
    parser.add_argument('--first', help='test N first grids from file',
                        type=int,
                        action='store', default=None)
    parser.add_argument('--techniques', help='techniques',
                        action='store', default=None)
    parser.add_argument('--step', help='apply a single step from the given technique set',
                        action='store_true', default=False)
    parser.add_argument('--explain', help='explain techniques',
                        action='store_true', default=False)
    parser.add_argument('--decorate', help='candidate decor when tracing grid',
                        choices=['none', 'color', 'char'],
                        action='store', default=None)
    parser.add_argument('--log-level', help='log level',
                        choices=list(LEVELS),
                        action='store', default=None)
    parser.add_argument('--print-level', help='prefix log messages with their level',
                        action='store_const', const=True, default=None)
    parser.add_argument('--trace', help='trace failing grids when testing',
                        action='store_true', default=False)
    parser.add_argument('--stats', help='count techniques when testing',
                        action='store_true', default=False)
    parser.add_argument('--output', help='file (or clipboard) to write the solved grid or the failing grids on',
                        action='store', default=None)
    parser.add_argument('--progressbar', help='display progress bar when solving file',
                        action='store_true', default=False)

    if argstring is None:
        args = parser.parse_args()
    else:
        args = parser.parse_args(argstring.split())
    return args


def main(argstring=None):
    options = parse_command_line(argstring)
    return main_args(options)


def main_args(options):
    try:
        config = load_config(config_filename(options))
        resolve_options(options, config)
        configure_logging(log_config(options))

        if options.solve:
            return solvegrid(options)

        elif options.testfile:
            return testing.testfile(options, options.testfile)

        elif options.testdir:
            return testing.testdir(options, options.testdir)

        else:
            return False, None

    except (ValueError, OSError, SudokuError) as e:
        application_error(e)


def cli():
    colorama.init()
    success, timing = main()
    sys.exit(0 if success else 1)


if __name__ == '__main__':
    cli()
