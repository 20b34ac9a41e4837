"""
3D Medusa coloring.

Candidates linked by strong links (a digit in exactly two cells of a house, a
cell with exactly two candidates) are colored with two parities per cluster.
Exactly one parity of each cluster is true in the solution.
"""


import itertools
import logging
from collections import namedtuple

from .grid import ALLDIGITS, ALLPOS, ROWPOS, COLPOS, BOXPOS, BUDDIES
from .grid import apply_remove_candidates, candidates_for_cell, packed_coordinates, removed_by_digit
from .logs import TRACE, format_changed


log = logging.getLogger(__name__)


Color = namedtuple('Color', 'id parity')


def parity_flipped(color):
    return Color(color.id, not color.parity)


# Strong links


def find_bilocation(grid, positions, digit):
    """return the two positions of digit in the house, None if digit is not
    a candidate in exactly two cells
    """
    found = [pos for pos in positions if grid.is_candidate_at(pos, digit)]
    return tuple(found) if len(found) == 2 else None


def find_bivalue(cell):
    """return the two candidates of cell, None if the cell has not exactly two
    candidates
    """
    if not cell.is_pair():
        return None
    return tuple(candidates_for_cell(cell))


def build_conjugate_links(grid):
    """list of strong links ((pos1, digit1), (pos2, digit2)). Scan order: rows,
    cols, boxes (digits 1 to 9 for each house), then bivalue cells row major.
    """
    links = []
    for positions in itertools.chain(ROWPOS, COLPOS, BOXPOS):
        for digit in ALLDIGITS:
            pair = find_bilocation(grid, positions, digit)
            if pair:
                links.append(((pair[0], digit), (pair[1], digit)))

    for pos in ALLPOS:
        pair = find_bivalue(grid.cell_at(pos))
        if pair:
            links.append(((pos, pair[0]), (pos, pair[1])))

    return links


# Colors


class MedusaColors:
    """Colored candidates indexed twice: by candidate (position, digit), one
    color per candidate, and by color, the set of candidates with this color.
    Both maps are updated together by insert and erase.
    """
    def __init__(self):
        self.by_candidate = {}
        self.by_color = {}

    def __len__(self):
        return len(self.by_candidate)

    def __contains__(self, candidate):
        return candidate in self.by_candidate

    def color_of(self, pos, digit):
        return self.by_candidate.get((pos, digit))

    def colors(self):
        return sorted(self.by_color)

    def color_ids(self):
        return sorted({color.id for color in self.by_color})

    def members(self, color):
        return sorted(self.by_color.get(color, ()))

    def component_size(self, color_id):
        return (len(self.by_color.get(Color(color_id, False), ())) +
                len(self.by_color.get(Color(color_id, True), ())))

    def next_id(self):
        if not self.by_color:
            return 0
        return max(color.id for color in self.by_color) + 1

    def insert(self, pos, digit, color):
        assert (pos, digit) not in self.by_candidate
        self.by_candidate[pos, digit] = color
        self.by_color.setdefault(color, set()).add((pos, digit))

    def erase(self, pos, digit):
        color = self.by_candidate.pop((pos, digit))
        group = self.by_color[color]
        group.discard((pos, digit))
        if not group:
            del self.by_color[color]
        return color

    def add_conjugate(self, pos1, val1, pos2, val2):
        """the two candidates of a strong link have opposite parities
        """
        color1 = self.color_of(pos1, val1)
        color2 = self.color_of(pos2, val2)

        if color1 is None and color2 is None:
            color_id = self.next_id()
            self.insert(pos1, val1, Color(color_id, False))
            self.insert(pos2, val2, Color(color_id, True))

        elif color2 is None:
            self.insert(pos2, val2, parity_flipped(color1))

        elif color1 is None:
            self.insert(pos1, val1, parity_flipped(color2))

        elif color1.id != color2.id:
            self.merge(color1, color2)

    def merge(self, color1, color2):
        """Merge the clusters of two linked candidates. The smaller cluster is
        absorbed into the larger one, or into the second one on equality. Parities of
        the absorbed cluster flip when both candidates have the same parity.
        """
        absorbed, kept = color1.id, color2.id
        if self.component_size(color1.id) > self.component_size(color2.id):
            absorbed, kept = color2.id, color1.id

        flip = color1.parity == color2.parity
        for parity in (False, True):
            for pos, digit in self.members(Color(absorbed, parity)):
                self.erase(pos, digit)
                self.insert(pos, digit, Color(kept, parity != flip))


def build_medusa_colors(grid):
    colors = MedusaColors()
    for (pos1, val1), (pos2, val2) in build_conjugate_links(grid):
        colors.add_conjugate(pos1, val1, pos2, val2)
    return colors


def describe_side(members):
    """r5c5#2 r1c1,r5c5#5: packed positions of the members, by digit
    """
    by_digit = removed_by_digit(members)
    return ' '.join(f'{packed_coordinates(by_digit[digit])}#{digit}' for digit in sorted(by_digit))


def describe_colors(colors):
    lines = []
    for color_id in colors.color_ids():
        sides = [describe_side(colors.members(Color(color_id, parity))) for parity in (False, True)]
        lines.append(f'color {color_id}: {sides[0]} / {sides[1]}')
    return '\n'.join(lines)


# Eliminations


def weakly_linked(candidate1, candidate2):
    """two candidates which cannot be both true: two digits in the same cell
    or the same digit in two buddy cells.
    """
    (pos1, digit1), (pos2, digit2) = candidate1, candidate2
    if pos1 == pos2:
        return digit1 != digit2
    else:
        return digit1 == digit2 and pos2 in BUDDIES[pos1]


def color_contradiction(members):
    return any(weakly_linked(x, y) for x, y in itertools.combinations(members, 2))


def medusa_color_wrap(grid, colors):
    """two candidates with the same color see each other. This color is false,
    all candidates with this color are eliminated.
    """
    remove_set = set()
    for color in colors.colors():
        members = colors.members(color)
        if color_contradiction(members):
            log.debug('color %d/%s sees itself', color.id, color.parity)
            remove_set.update(members)

    if not remove_set:
        return False

    changed = apply_remove_candidates(grid, '3d medusa color wrap', remove_set)
    log.info('3d medusa color wrap ==> %s', format_changed(changed))
    return bool(changed)


def visible_colors(grid, colors, pos, digit):
    """colors of the other candidates of the cell and of the same digit in
    buddy cells
    """
    visible = set()
    for other in candidates_for_cell(grid.cell_at(pos)):
        if other != digit:
            color = colors.color_of(pos, other)
            if color is not None:
                visible.add(color)
    for buddy in BUDDIES[pos]:
        if grid.is_candidate_at(buddy, digit):
            color = colors.color_of(buddy, digit)
            if color is not None:
                visible.add(color)
    return visible


def medusa_color_trap(grid, colors):
    """an uncolored candidate sees both parities of a cluster. It is false
    whatever the true parity.
    """
    remove_set = set()
    for pos in ALLPOS:
        for digit in candidates_for_cell(grid.cell_at(pos)):
            if (pos, digit) in colors:
                continue
            visible = visible_colors(grid, colors, pos, digit)
            if any(parity_flipped(color) in visible for color in visible):
                remove_set.add((pos, digit))

    if not remove_set:
        return False

    changed = apply_remove_candidates(grid, '3d medusa color trap', remove_set)
    log.info('3d medusa color trap ==> %s', format_changed(changed))
    return bool(changed)


def solve_medusa(grid):
    log.log(TRACE, 'searching for 3d medusa color eliminations')
    colors = build_medusa_colors(grid)
    if log.isEnabledFor(logging.DEBUG) and len(colors):
        log.debug(describe_colors(colors))
    wrapped = medusa_color_wrap(grid, colors)
    trapped = medusa_color_trap(grid, colors)
    return wrapped or trapped
