"""
Cells, houses and grid of a 9x9 sudoku.
"""


import re
import itertools
from collections import defaultdict
from enum import Enum

from colorama import Fore


# Data structures


ALLCAND = {1, 2, 3, 4, 5, 6, 7, 8, 9}
ALLDIGITS = (1, 2, 3, 4, 5, 6, 7, 8, 9)


class SudokuError(Exception):
    def __init__(self, *args):
        super().__init__(*args)
        self.message = ' '.join(str(_) for _ in args)


class PreconditionError(SudokuError):
    """caller contract violation (unsolved cell read, digit out of range)
    """


def check_digit(digit):
    if digit not in ALLCAND:
        raise PreconditionError(f'digit out of range: {digit}')


class Cell:
    """A cell is either solved (a value, no candidates) or unsolved (a non
    empty set of candidates). A cell does not know its position, the grid
    does.
    """
    def __init__(self, value=None, candidates=None, given=False):
        self.given = False
        self.value = None
        if value is not None:
            self.set_value(value, given=given)
        elif candidates is not None:
            self.candidates = set(candidates)
        else:
            self.candidates = set(ALLCAND)

    def __str__(self):
        """format cell as value or candidates
        """
        if self.value:
            return str(self.value) + '.'
        else:
            return ''.join(str(_) for _ in sorted(self.candidates))

    def __repr__(self):
        return f'Cell({self})'

    def __eq__(self, other):
        return (isinstance(other, Cell) and
                self.value == other.value and
                self.candidates == other.candidates)

    def copy(self):
        cell = Cell(candidates=self.candidates)
        cell.value = self.value
        cell.given = self.given
        return cell

    def assign(self, other):
        """copy the state of other into self
        """
        self.value = other.value
        self.given = other.given
        self.candidates = set(other.candidates)

    def has_value(self):
        return self.value is not None

    def get_value(self):
        if self.value is None:
            raise PreconditionError('value of unsolved cell')
        return self.value

    def set_value(self, digit, given=False):
        check_digit(digit)
        self.given = given
        self.value = digit
        self.candidates = set()

    def is_candidate(self, digit):
        check_digit(digit)
        return digit in self.candidates

    def num_candidates(self):
        return len(self.candidates)

    def exclude_candidate(self, digit) -> bool:
        """remove a candidate from cell. Return True if the candidate was
        present.
        """
        check_digit(digit)
        if digit not in self.candidates:
            return False
        self.candidates.discard(digit)
        return True

    def is_pair(self):
        return len(self.candidates) == 2


def candidates_for_cell(cell):
    return sorted(cell.candidates)


# Positions


def box_of(pos):
    irow, icol = pos
    return (irow // 3) * 3 + icol // 3


def cell_in_box(ibox, index):
    """position of the index-th cell (row major) of box ibox
    """
    return (ibox // 3) * 3 + index // 3, (ibox % 3) * 3 + index % 3


def strcoord(pos):
    return f'r{pos[0] + 1}c{pos[1] + 1}'


ALLPOS = tuple((irow, icol) for irow in range(9) for icol in range(9))
ROWPOS = tuple(tuple((irow, icol) for icol in range(9)) for irow in range(9))
COLPOS = tuple(tuple((irow, icol) for irow in range(9)) for icol in range(9))
BOXPOS = tuple(tuple(cell_in_box(ibox, index) for index in range(9)) for ibox in range(9))


def make_buddies(pos):
    irow, icol = pos
    buddies = set(ROWPOS[irow]) | set(COLPOS[icol]) | set(BOXPOS[box_of(pos)])
    buddies.discard(pos)
    return tuple(sorted(buddies))


# properties: x not in buddies(x), x in buddies(y) equivalent to y in buddies(x)
BUDDIES = {pos: make_buddies(pos) for pos in ALLPOS}


class Grid:
    def __init__(self):
        """create a grid without known values
        """
        # make the list of 81 cells
        self.cells = [Cell() for _ in range(81)]

        # make the list of 9 rows
        self.rows = [self.cells[i:i + 9] for i in range(0, 81, 9)]

        # make the list of 9 cols
        self.cols = [list(x) for x in zip(*self.rows)]

        # make the list of 9 boxes
        self.boxes = [[self.rows[irow][icol] for irow, icol in positions] for positions in BOXPOS]

        # init history
        self.history = []

        # cell decoration when tracing ('color', 'char' or 'none')
        self.decorate = 'color'

    def reset(self):
        self.history = []
        for cell in self.cells:
            cell.assign(Cell())

    def copy(self):
        """copy of values and candidates, without history
        """
        grid = Grid()
        grid.decorate = self.decorate
        for cell, other in zip(grid.cells, self.cells):
            cell.assign(other)
        return grid

    def get_cell(self, irow, icol):
        return self.rows[irow][icol]

    def set_cell(self, cell, irow, icol):
        self.rows[irow][icol].assign(cell)

    def get_row(self, index):
        return self.rows[index]

    def get_col(self, index):
        return self.cols[index]

    def get_box(self, index):
        return self.boxes[index]

    def get_buddies(self, pos):
        return BUDDIES[pos]

    def units(self):
        """positions of the 27 houses: rows, then cols, then boxes
        """
        return itertools.chain(ROWPOS, COLPOS, BOXPOS)

    def cell_at(self, pos):
        return self.rows[pos[0]][pos[1]]

    def is_candidate_at(self, pos, digit):
        return digit in self.rows[pos[0]][pos[1]].candidates

    def set_value_rc(self, irow, icol, digit, given=False):
        """place digit and discard it from the buddies. Return the discarded
        candidates as a dict digit: set of positions.
        """
        cell = self.rows[irow][icol]
        discarded = defaultdict(set)
        for candidate in cell.candidates:
            if candidate != digit:
                discarded[candidate].add((irow, icol))
        cell.set_value(digit, given=given)

        for pos in BUDDIES[irow, icol]:
            if self.cell_at(pos).exclude_candidate(digit):
                discarded[digit].add(pos)

        return discarded

    def solved(self):
        return all(cell.value is not None for cell in self.cells)

    def check_consistency(self):
        for pos in ALLPOS:
            cell = self.cell_at(pos)
            if cell.value is None and not cell.candidates:
                raise SudokuError(f'no candidate left in {strcoord(pos)}')

    def push(self, item):
        """
        Push item on history. Item is a tuple:
        (caption, 'value', position, value, {cand: set_of_positions, ...})
        (caption, 'discard', {cand: set_of_positions, ...})
        """
        self.history.append(item)

    # Input

    def input(self, string):
        string = string.strip()
        if re.match(r'[\d.]{81}$', string):
            self.input_s81(string)
        elif re.match(r'([1-9]{1,9},){80}[1-9]{1,9}$', string):
            self.input_csv(string)
        elif re.match(r'([gvc][1-9]{1,9}){81}$', string):
            self.input_gvc(string)
        elif string81 := grid_to_string81(string):
            self.input_s81(string81)
        else:
            raise SudokuError(f'illegal grid format in string: {string}')

    def input_s81(self, str81):
        """load a 81 character string of given values
        """
        self.reset()
        for pos, char in zip(ALLPOS, str81):
            if char in '123456789':
                self.set_value_rc(*pos, int(char), given=True)

    def input_csv(self, strcand):
        """load a comma separated list of candidates, a single candidate is
        considered as a given value
        """
        self.reset()
        for pos, candidates in zip(ALLPOS, strcand.split(',')):
            if len(candidates) == 1:
                self.cell_at(pos).set_value(int(candidates), given=True)
            else:
                self.cell_at(pos).candidates = set(int(_) for _ in candidates)

    def input_gvc(self, string):
        """load a given-value-candidates string ([gvc][1-9]{1,9}){81}
        """
        self.reset()
        for pos, s in zip(ALLPOS, re.findall(r'[gvc][1-9]{1,9}', string)):
            cell = self.cell_at(pos)
            if s[0] == 'g':
                cell.set_value(int(s[1]), given=True)
            elif s[0] == 'v':
                cell.set_value(int(s[1]), given=False)
            else:
                cell.candidates = set(int(_) for _ in s[1:])

    # Output

    def output_s81(self):
        """return a 81 character string
        """
        return ''.join(str(cell.value) if cell.value else '.' for cell in self.cells)

    def output_csv(self):
        """return a comma separated list of candidates, a value is considered
         as a single candidate
        """
        return ','.join(str(cell.value) if cell.value else ''.join(str(_) for _ in sorted(cell.candidates))
                        for cell in self.cells)

    def output_gvc(self):
        """return a given-value-candidates string ([gvc][1-9]{1,9}){81}
        """
        lst = []
        for cell in self.cells:
            if cell.given:
                lst.append(f'g{cell.value}')
            elif cell.value:
                lst.append(f'v{cell.value}')
            else:
                lst.append('c' + ''.join(str(_) for _ in sorted(cell.candidates)))
        return ''.join(lst)

    def compare_string(self, ref):
        if re.match(r'^[\d.]{81}$', ref):
            return self.output_s81() == ref
        elif re.match(r'^([1-9]{1,9},){80}\d{1,9}$', ref):
            return self.output_csv() == ref
        elif re.match(r'^([gvc][1-9]{1,9}){81}$', ref):
            # a single candidate is equivalent to a value
            str1 = re.sub(r'c([1-9]([gvc]|$))', r'v\1', self.output_gvc())
            str2 = re.sub(r'c([1-9]([gvc]|$))', r'v\1', ref)
            return str1 == str2
        else:
            raise ValueError(f'unknown grid format: {ref}')

    # Display

    def dumpstr(self, decor=None):
        """decor is a dict (position, digit): CellDecor
        """
        colorize_candidates = {
            'char': colorize_candidates_char,
            'none': colorize_candidates_none,
        }.get(self.decorate, colorize_candidates_color)

        lines = []
        hborder = ('+' + ('-' * (3 * 10 - 1))) * 3 + '+'
        for irow in range(9):
            if irow % 3 == 0:
                lines.append(hborder)
            line = []
            for icol, cell in enumerate(self.rows[irow]):
                line.append('%s%s' % ('|' if icol % 3 == 0 else ' ',
                                      colorize_candidates(cell, (irow, icol), decor or {})))
            lines.append(''.join(line) + '|')
        lines.append(hborder)
        lines.append('')
        return '\n'.join(lines)

    def dump(self, decor=None):
        print(self.dumpstr(decor))


CellDecor = Enum('CellDecor', 'VALUE GIVEN DEFAULTCAND DEFININGCAND REMOVECAND')

CellDecorColor = {
    CellDecor.GIVEN: Fore.BLUE,
    CellDecor.VALUE: Fore.CYAN,
    CellDecor.DEFAULTCAND: Fore.WHITE,
    CellDecor.DEFININGCAND: Fore.GREEN,
    CellDecor.REMOVECAND: Fore.RED,
}

CellDecorChar = {
    CellDecor.GIVEN: '.',
    CellDecor.VALUE: '+',
    CellDecor.DEFAULTCAND: '',
    CellDecor.DEFININGCAND: '!',
    CellDecor.REMOVECAND: 'x',
}


def colorize_candidates_color(cell, pos, decor):
    if cell.value is not None:
        celldecor = CellDecor.GIVEN if cell.given else CellDecor.VALUE
        res = CellDecorColor[celldecor] + str(cell.value) + Fore.RESET
        # manual padding as colorama information fools format padding
        return res + ' ' * (9 - 1)
    else:
        res = ''
        for cand in sorted(cell.candidates):
            celldecor = decor.get((pos, cand), CellDecor.DEFAULTCAND)
            res += CellDecorColor[celldecor] + str(cand) + Fore.RESET
        return res + ' ' * (9 - len(cell.candidates))


def colorize_candidates_char(cell, pos, decor):
    if cell.value is not None:
        celldecor = CellDecor.GIVEN if cell.given else CellDecor.VALUE
        res = str(cell.value) + CellDecorChar[celldecor]
    else:
        res = ''.join(str(cand) + CellDecorChar[decor.get((pos, cand), CellDecor.DEFAULTCAND)]
                      for cand in sorted(cell.candidates))
    return '%-9s' % res


def colorize_candidates_none(cell, pos, decor):
    return '%-9s' % (cell.value if cell.value is not None else cell)


# Loading


def grid_to_string81(string: str) -> str:
    """Convert a string containing a grid of values into a normalized string made
    of 81 digits or dots. The grid may contain horizontal or vertical separators.
    Horizontal separators are lines containing dashes ('-') which cannot be used
    as an unknown digit. Vertical separators are bar characters ('|'). The
    character denoting unknown digits ('.', '0', ...) must be unique.
    """
    lines = [line.strip() for line in string.splitlines()]
    lines = [line for line in lines if line and '-' not in line]
    string = ''.join(lines)
    string = string.replace('|', '').replace(' ', '')
    if len(string) != 81:
        return ''
    chars = ''.join(sorted(set(string)))
    if len(set(chars) - set('123456789')) == 1:
        return re.sub('[^1-9]', '.', string)
    else:
        return ''


# Helpers


def packed_coordinates(positions):
    """Make a string of packed coordinates (ex: r4c89,r5c89) from positions.
    """
    row_cells = defaultdict(list)
    col_cells = defaultdict(list)
    for irow, icol in positions:
        row_cells[irow + 1].append(icol + 1)
        col_cells[icol + 1].append(irow + 1)

    if len(row_cells) <= len(col_cells):
        lcoord = sorted(f'r{rownum}c{"".join(str(_) for _ in sorted(cols))}'
                        for rownum, cols in row_cells.items())
    else:
        lcoord = sorted(f'r{"".join(str(_) for _ in sorted(rows))}c{colnum}'
                        for colnum, rows in col_cells.items())
    return ','.join(lcoord)


def removed_by_digit(removed):
    """convert an iterable of (position, digit) into a dict digit: set of
    positions, as stored in history
    """
    remove_dict = defaultdict(set)
    for pos, digit in removed:
        remove_dict[digit].add(pos)
    return dict(remove_dict)


def apply_remove_candidates(grid, caption, removed):
    """discard candidates (position, digit) from grid and record the move.
    Return the list of (row, col, digit) actually removed.
    """
    changed = []
    for pos, digit in sorted(removed):
        if grid.cell_at(pos).exclude_candidate(digit):
            changed.append((pos[0], pos[1], digit))
    if changed:
        grid.push((caption, 'discard', removed_by_digit(((r, c), d) for r, c, d in changed)))
    return changed
