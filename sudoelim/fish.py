"""
Basic fishes: X-wing, swordfish, jellyfish.
"""


import itertools
import logging

from .grid import ALLDIGITS, apply_remove_candidates
from .logs import TRACE, format_changed


log = logging.getLogger(__name__)

FISH_NAMES = {
    1: '1-fish',
    2: 'x-wing',
    3: 'swordfish',
    4: 'jellyfish',
}


def solve_x_wing(grid):
    log.log(TRACE, 'searching for x-wings')
    return find_basic_fish(grid, 2)


def solve_swordfish(grid):
    log.log(TRACE, 'searching for swordfish')
    return find_basic_fish(grid, 3)


def solve_jellyfish(grid):
    log.log(TRACE, 'searching for jellyfish')
    return find_basic_fish(grid, 4)


def find_basic_fish(grid, order):
    """Find the first fish of the given order (rows as base, then cols as base,
    for digits 1 to 9) removing at least one candidate. Return True if
    candidates have been removed.
    """
    if order not in FISH_NAMES:
        raise ValueError(f'unsupported fish order: {order}')

    for digit in ALLDIGITS:
        if max_size_of_basic_fish(grid, digit) < order:
            continue
        if solve_basicfish_rows(grid, order, digit, 'H'):
            return True
        if solve_basicfish_rows(grid, order, digit, 'V'):
            return True
    return False


def max_size_of_basic_fish(grid, digit):
    """each unplaced digit needs two houses of each orientation to be part of
    a fish.
    """
    placed = sum(1 for cell in grid.cells if cell.value == digit)
    return (9 - placed) // 2


def fish_position(orientation, base, cover):
    return (base, cover) if orientation == 'H' else (cover, base)


def possible_bases(grid, order, digit, orientation):
    """indices of the houses with digit as candidate in 1 to order cells
    """
    houses = grid.rows if orientation == 'H' else grid.cols
    indices = []
    for index, house in enumerate(houses):
        num = sum(1 for cell in house if digit in cell.candidates)
        if 0 < num <= order:
            indices.append(index)
    return indices


def cover_of(grid, digit, bases, orientation):
    houses = grid.rows if orientation == 'H' else grid.cols
    return sorted({icover for base in bases
                          for icover, cell in enumerate(houses[base])
                          if digit in cell.candidates})


def solve_basicfish_rows(grid, order, digit, orientation):
    """orientation 'H': rows are the base and cols the cover, 'V': the
    reverse.
    """
    for bases in itertools.combinations(possible_bases(grid, order, digit, orientation), order):
        covers = cover_of(grid, digit, bases, orientation)
        if len(covers) != order:
            continue

        remove_set = []
        for base in range(9):
            if base in bases:
                continue
            for cover in covers:
                pos = fish_position(orientation, base, cover)
                if grid.is_candidate_at(pos, digit):
                    remove_set.append((pos, digit))

        if remove_set:
            changed = apply_remove_candidates(grid, FISH_NAMES[order], remove_set)
            log.info('%s %s ==> %s', FISH_NAMES[order],
                     describe_basic_fish(orientation, bases, covers, digit),
                     format_changed(changed))
            return True
    return False


def describe_basic_fish(orientation, bases, covers, digit):
    """r1,4/c3,7=5 for rows 1 and 4 as base and cols 3 and 7 as cover
    """
    base_unit, cover_unit = ('r', 'c') if orientation == 'H' else ('c', 'r')
    sbases = ','.join(str(_ + 1) for _ in bases)
    scovers = ','.join(str(_ + 1) for _ in covers)
    return f'{base_unit}{sbases}/{cover_unit}{scovers}={digit}'
