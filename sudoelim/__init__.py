from .grid import Cell, Grid, SudokuError, PreconditionError, candidates_for_cell
from .fish import find_basic_fish, solve_x_wing, solve_swordfish, solve_jellyfish
from .medusa import (MedusaColors, Color, build_conjugate_links, build_medusa_colors,
                     medusa_color_wrap, medusa_color_trap, solve_medusa)
from .solver import SOLVER, make_list_techniques, apply_strategy, solve
from .logs import LogConfig, configure_logging, TRACE
