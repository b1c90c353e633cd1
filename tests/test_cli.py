import pytest

from vrp.cli import main

HEADER = "loadNumber pickup dropoff\n"


def write_problem(tmp_path, body):
    path = tmp_path / "problem.txt"
    path.write_text(HEADER + body, encoding="utf-8")
    return str(path)


def test_prints_one_schedule_per_line(tmp_path, capsys):
    path = write_problem(tmp_path, "1 (0,0) (10,0)\n2 (10,0) (20,0)\n")
    assert main([path]) == 0
    assert capsys.readouterr().out == "[1,2]\n"


def test_shorter_shift_splits_drivers(tmp_path, capsys):
    path = write_problem(tmp_path, "1 (0,40) (0,40)\n2 (40,0) (40,0)\n")
    assert main([path, "--max-drive-time", "100"]) == 0
    assert capsys.readouterr().out == "[1]\n[2]\n"


def test_missing_path_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_unreadable_file_exits_nonzero(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_malformed_line_exits_nonzero(tmp_path, capsys):
    path = write_problem(tmp_path, "1 (0,0) (10,0)\nbad line\n")
    assert main([path]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "line 3" in captured.err


def test_unroutable_load_fails_unless_skipped(tmp_path, capsys):
    path = write_problem(tmp_path, "1 (0,0) (10,0)\n2 (500,0) (0,500)\n")
    assert main([path]) == 1
    assert "cannot be delivered" in capsys.readouterr().err

    assert main([path, "--skip-unroutable", "--summary"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "[1]\n"
    assert "Unassigned: [2]" in captured.err


def test_invalid_max_drive_time_exits_nonzero(tmp_path, capsys):
    path = write_problem(tmp_path, "1 (0,0) (10,0)\n")
    assert main([path, "--max-drive-time", "0"]) == 1
    assert "max_drive_time" in capsys.readouterr().err


def test_empty_problem_prints_nothing(tmp_path, capsys):
    path = write_problem(tmp_path, "")
    assert main([path]) == 0
    assert capsys.readouterr().out == ""
