"""
Singles: full house, naked single, hidden single.
"""


import logging

from .grid import ALLPOS, ROWPOS, COLPOS, BOXPOS, box_of, strcoord


log = logging.getLogger(__name__)


def place_value(grid, caption, pos, digit):
    discarded = grid.set_value_rc(*pos, digit)
    grid.push((caption, 'value', pos, digit, dict(discarded)))
    log.info('%s %s=%d', caption, strcoord(pos), digit)
    return True


def solve_full_house(grid):
    for unit in grid.units():
        unset = [pos for pos in unit if grid.cell_at(pos).value is None]
        if len(unset) == 1:
            pos = unset[0]
            candidates = grid.cell_at(pos).candidates
            if len(candidates) == 1:
                return place_value(grid, 'full house', pos, min(candidates))
    return False


def solve_single_candidate(grid):
    # naked singles
    for pos in ALLPOS:
        candidates = grid.cell_at(pos).candidates
        if len(candidates) == 1:
            return place_value(grid, 'naked single', pos, min(candidates))
    return False


def alone_in_unit(grid, pos, digit, unit):
    return not any(grid.is_candidate_at(peer, digit) for peer in unit if peer != pos)


def solve_hidden_candidate(grid):
    # hidden singles
    for pos in ALLPOS:
        cell = grid.cell_at(pos)
        if len(cell.candidates) < 2:
            continue
        irow, icol = pos
        for cand in sorted(cell.candidates):
            if (alone_in_unit(grid, pos, cand, ROWPOS[irow]) or
                alone_in_unit(grid, pos, cand, COLPOS[icol]) or
                alone_in_unit(grid, pos, cand, BOXPOS[box_of(pos)])):
                return place_value(grid, 'hidden single', pos, cand)
    return False
