import io
import logging
from collections import defaultdict

import pytest

from sudoelim.solver import SOLVER, STRATEGY_DEFAULT, make_list_techniques, solve
from sudoelim.sudoelim import main, parse_command_line
from sudoelim.config import load_config, resolve_options
from sudoelim.logs import LogConfig, configure_logging
from sudoelim.fish import solve_x_wing
from sudoelim.testing import stats_table
from sudoelim.singles import solve_single_candidate, solve_hidden_candidate

from conftest import EASY, EASY_SOLUTION, keep_digit_in_row


# Techniques


def test_default_techniques():
    assert make_list_techniques('default') == STRATEGY_DEFAULT.split(',')


def test_all_but_medusa():
    techniques = make_list_techniques('all-mdc')
    assert 'mdc' not in techniques
    assert techniques == [technique for technique in SOLVER if technique != 'mdc']


def test_unknown_technique():
    with pytest.raises(ValueError, match='xyz'):
        make_list_techniques('fh,xyz')


# Driver


def test_solve_easy(grid):
    grid.input(EASY)
    assert solve(grid, 'default') is True
    assert grid.output_s81() == EASY_SOLUTION


def test_single_step(grid):
    grid.input(EASY)
    assert solve(grid, 'default', step=True) is False
    assert len(grid.history) == 1


def test_stats_count_steps(grid):
    grid.input(EASY)
    stats = defaultdict(int)
    solve(grid, 'default', stats=stats)
    assert grid.solved()
    assert sum(stats.values()) == len(grid.history)
    assert 'total' in stats_table(stats)


def test_no_progress_stops(grid):
    assert solve(grid, 'fh,n1,h1') is False
    assert grid.history == []


# Command line


def test_cli_solve(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    success, timing = main(f'-s {EASY} --decorate none')
    assert success
    assert EASY_SOLUTION in capsys.readouterr().out


def test_cli_testfile(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    testfile = tmp_path / 'easy.txt'
    testfile.write_text(f'# easy grids\n{EASY} {EASY_SOLUTION}\n')
    success, timing = main(f'-t {testfile} --decorate none --log-level error')
    assert success
    assert 'Result: True Solved: 1/1' in capsys.readouterr().out


def test_cli_testfile_unwritable_output(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    testfile = tmp_path / 'easy.txt'
    testfile.write_text(f'{EASY} {EASY_SOLUTION}\n')
    with pytest.raises(SystemExit) as exc:
        main(f'-t {testfile} --output {tmp_path / "nodir" / "out.txt"}')
    assert exc.value.code == 1
    assert 'sudoelim error:' in capsys.readouterr().out


def test_cli_solve_to_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    outfile = tmp_path / 'out.txt'
    success, timing = main(f'-s {EASY} --decorate none --output {outfile}')
    assert success
    assert outfile.read_text().splitlines()[-1] == EASY_SOLUTION
    assert EASY_SOLUTION not in capsys.readouterr().out


def test_cli_bad_technique(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(f'-s {EASY} --techniques fh,foo')
    assert exc.value.code == 1
    assert 'sudoelim error: unknown technique: foo' in capsys.readouterr().out


def test_cli_missing_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        main(f'-s {EASY} --config {tmp_path / "missing.ini"}')


# Configuration


def test_config_file_and_overrides(tmp_path):
    inifile = tmp_path / 'sudoelim.ini'
    inifile.write_text('[Solver]\ntechniques = fh,n1\n\n'
                       '[Logging]\nlevel = debug\nprint_level = yes\n\n'
                       '[Display]\ndecorate = char\n')
    options = parse_command_line(f'-s {EASY} --decorate none')
    resolve_options(options, load_config(str(inifile)))
    assert options.techniques == 'fh,n1'
    assert options.log_level == 'debug'
    assert options.print_level is True
    assert options.decorate == 'none'


def test_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    options = parse_command_line(f'-s {EASY}')
    resolve_options(options, load_config())
    assert options.techniques == 'default'
    assert options.log_level == 'info'
    assert options.print_level is False
    assert options.decorate == 'color'


# Logging


def test_trace_with_level_prefix(grid):
    stream = io.StringIO()
    configure_logging(LogConfig('trace', True), stream)
    keep_digit_in_row(grid, 5, 0, (2, 6))
    keep_digit_in_row(grid, 5, 3, (2, 6))
    solve_x_wing(grid)
    lines = stream.getvalue().splitlines()
    assert lines[0] == 'TRACE: searching for x-wings'
    assert lines[-1].startswith('INFO: x-wing r1,4/c3,7=5 ==> ')


def test_log_level_filters(grid):
    stream = io.StringIO()
    configure_logging(LogConfig('warning'), stream)
    keep_digit_in_row(grid, 5, 0, (2, 6))
    keep_digit_in_row(grid, 5, 3, (2, 6))
    assert solve_x_wing(grid) is True
    assert stream.getvalue() == ''


def test_bad_log_level():
    with pytest.raises(ValueError):
        LogConfig('verbose')


# Singles


def test_naked_single(grid, caplog):
    caplog.set_level(logging.INFO, logger='sudoelim')
    for digit in (1, 2, 3, 4, 6, 7, 8, 9):
        grid.get_cell(0, 1).exclude_candidate(digit)
    assert solve_single_candidate(grid) is True
    assert grid.get_cell(0, 1).get_value() == 5
    assert caplog.messages[-1] == 'naked single r1c2=5'
    assert grid.history[-1][:4] == ('naked single', 'value', (0, 1), 5)


def test_hidden_single(grid, caplog):
    caplog.set_level(logging.INFO, logger='sudoelim')
    assert solve_hidden_candidate(grid) is False
    keep_digit_in_row(grid, 7, 2, (4,))
    assert solve_hidden_candidate(grid) is True
    assert grid.get_cell(2, 4).get_value() == 7
    assert caplog.messages[-1] == 'hidden single r3c5=7'
