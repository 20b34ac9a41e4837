import logging

import pytest

from sudoelim.grid import Grid


EASY = '530070000600195000098000060800060003400803001700020006060000280000419005000080079'
EASY_SOLUTION = '534678912672195348198342567859761423426853791713924856961537284287419635345286179'

HARD = '4.....8.5.3..........7......2.....6.....8.4......1.......6.3.7.5..2.....1.4......'
HARD_SOLUTION = '417369825632158947958724316825437169791586432346912758289643571573291684164875293'


def remove_digit(grid, digit, positions):
    for pos in positions:
        grid.cell_at(pos).exclude_candidate(digit)


def keep_digit_in_row(grid, digit, irow, icols):
    remove_digit(grid, digit, [(irow, icol) for icol in range(9) if icol not in icols])


def keep_digit_in_col(grid, digit, icol, irows):
    remove_digit(grid, digit, [(irow, icol) for irow in range(9) if irow not in irows])


def snapshot(grid):
    return {(irow, icol): set(grid.get_cell(irow, icol).candidates)
            for irow in range(9) for icol in range(9)}


@pytest.fixture
def grid():
    return Grid()


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger('sudoelim')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
