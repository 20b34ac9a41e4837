"""
Solving engine: techniques applied in priority order until the grid is solved
or no technique makes progress.
"""


import re

from .grid import Grid, CellDecor
from .singles import solve_full_house, solve_single_candidate, solve_hidden_candidate
from .fish import find_basic_fish, solve_x_wing, solve_swordfish, solve_jellyfish
from .medusa import solve_medusa


def solve_one_fish(grid):
    return find_basic_fish(grid, 1)


SOLVER = {
    'fh': solve_full_house,
    'n1': solve_single_candidate,
    'h1': solve_hidden_candidate,
    'bf1': solve_one_fish,
    'bf2': solve_x_wing,
    'bf3': solve_swordfish,
    'bf4': solve_jellyfish,
    'mdc': solve_medusa,
}

STRATEGY_DEFAULT = 'fh,n1,h1,bf2,bf3,bf4,mdc'


def make_list_techniques(strategy):
    """Expand a strategy string: comma separated technique ids, aliases
    'default' and 'all', and 'a,b,c-b' to exclude techniques.
    """
    strategy = re.sub(r'\bdefault\b', STRATEGY_DEFAULT, strategy)
    strategy = re.sub(r'\ball\b', ','.join(SOLVER), strategy)

    if '-' not in strategy:
        techniques = strategy.split(',')
    else:
        x, y = strategy.split('-', 1)
        y = y.split(',')
        techniques = [z for z in x.split(',') if z not in y]

    techniques = [_.strip() for _ in techniques if _.strip()]
    for technique in techniques:
        if technique not in SOLVER:
            raise ValueError(f'unknown technique: {technique}')
    return techniques


def apply_strategy(grid, list_techniques, stats=None):
    for technique in list_techniques:
        if SOLVER[technique](grid):
            if stats is not None:
                stats[technique] += 1
            return True
    else:
        return False


def solve(grid, techniques, explain=False, step=False, stats=None):
    """Apply techniques until the grid is solved, no technique applies, or
    after one step if step is True. Return True if the grid is solved.
    """
    list_techniques = make_list_techniques(techniques)
    if explain:
        print(grid.output_s81())
        grid.dump()

    while not grid.solved():
        before = grid.copy() if explain else None
        if not apply_strategy(grid, list_techniques, stats):
            break
        grid.check_consistency()
        if explain:
            explain_move(grid, before)
        if step:
            break

    return grid.solved()


def last_move_decor(grid):
    """decoration of the candidates involved in the last move
    """
    decor = {}
    caption, move, *rest = grid.history[-1]
    if move == 'value':
        pos, digit, discarded = rest
        decor[pos, digit] = CellDecor.DEFININGCAND
    else:
        discarded, = rest
    for digit, positions in discarded.items():
        for pos in positions:
            decor.setdefault((pos, digit), CellDecor.REMOVECAND)
    return caption, decor


def explain_move(grid, before: Grid):
    caption, decor = last_move_decor(grid)
    print(caption)
    before.dump(decor)
