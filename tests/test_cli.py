from main import main


def test_cli_prints_scoreboard(capsys):
    code = main(["--side-a", "Alice", "--side-b", "Bob", "--rallies", "aab"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Friendly Match (Singles)  Game 1/3" in out
    assert "Alice" in out
    assert "2-1+" in out


def test_cli_reports_winner(capsys):
    code = main(["--side-a", "Alice", "--side-b", "Bob", "--rallies", "b" * 42])

    out = capsys.readouterr().out
    assert code == 0
    assert "Winner: Side B (Bob)" in out
    assert "side_b" not in out


def test_cli_doubles_requires_all_names(capsys):
    code = main(["--type", "doubles", "--side-a", "Ann", "Bea", "--side-b", "Cat"])

    out = capsys.readouterr().out
    assert code == 1
    assert "side_b[1]" in out


def test_cli_strict_rejects_extra_point(capsys):
    code = main(["--side-a", "A", "--side-b", "B", "--strict", "--rallies", "a" * 43])

    assert code == 1
    assert "ERROR" in capsys.readouterr().out


def test_cli_invalid_rally_code(capsys):
    code = main(["--side-a", "A", "--side-b", "B", "--rallies", "abz"])

    assert code == 1


def test_cli_rallies_with_separators(capsys):
    code = main(["--side-a", "A", "--side-b", "B", "--rallies", "a, a, b"])

    assert code == 0
    assert "2-1+" in capsys.readouterr().out
