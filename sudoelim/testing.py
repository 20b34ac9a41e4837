"""
Testing module for sudoelim: solve files of grids and compare with expected
results.
"""


import sys
import glob
import re
import time
import random
from collections import defaultdict

from tabulate import tabulate
from tqdm import tqdm

from .grid import Grid, SudokuError
from .solver import solve


def read_grids(filename):
    try:
        with open(filename) as f:
            grids = f.readlines()
    except IOError:
        raise SudokuError('unable to read', filename)

    # remove empty lines and full line comments before choosing grids
    return [line for line in grids if line.strip() and line[0] not in ';#']


def choose_grids(options, grids):
    if options.first:
        if options.first < len(grids):
            grids = grids[:options.first]
    elif options.random:
        if options.random < len(grids):
            grids = random.sample(grids, options.random)
    return grids


def testfile(options, filename, stats=None):
    """Each line of the file is made of an input grid and the expected grid
    after solving, in any grid format.
    """
    grid = Grid()
    grid.decorate = options.decorate
    ngrids = 0
    solved = 0
    grids = choose_grids(options, read_grids(filename))
    local_stats = defaultdict(int) if stats is None else stats

    t0 = time.time()
    f = open(options.output, 'wt') if options.output else sys.stdout
    try:
        for line in tqdm(grids, disable=not options.progressbar):
            line = re.sub('#.*', '', line)
            try:
                input, output = line.strip().split(None, 1)
                grid.input(input)
                solve(grid, options.techniques, stats=local_stats)
                if grid.compare_string(output.strip()):
                    solved += 1
                elif options.trace:
                    print(input, output.strip(), grid.output_s81(), file=f)
                ngrids += 1
            except (ValueError, SudokuError):
                print(f'Test file: {filename:20} Result: False Solved: {solved}/{ngrids} Error: Incorrect line format')
                return False, 0
    finally:
        if options.output:
            f.close()

    timing = time.time() - t0
    success = solved == ngrids
    print(f'Test file: {filename:20} Result: {success} Solved: {solved}/{ngrids} Time: {timing:0.3}')
    if options.stats and stats is None:
        print_stats(local_stats)
    return success, timing


def testdir(options, dirname):
    tested = 0
    solved = 0
    stats = defaultdict(int)
    t0 = time.time()
    for filename in sorted(glob.glob(f'{dirname}/*.txt')):
        filename = filename.replace('\\', '/')
        tested += 1
        success, timing = testfile(options, filename, stats)
        if success:
            solved += 1

    success = solved == tested
    timing_dir = time.time() - t0
    print(f'Test dir : {dirname:20} Result: {success} Solved: {solved}/{tested} Time: {timing_dir:0.3}')
    if options.stats:
        print_stats(stats)
    return success, timing_dir


def stats_table(stats):
    tabulate_data = [[technique, count] for technique, count in sorted(stats.items())]
    tabulate_data.append(['total', sum(stats.values())])
    return tabulate(tabulate_data, headers=['technique', 'count'])


def print_stats(stats):
    print()
    print(stats_table(stats))
    print()
