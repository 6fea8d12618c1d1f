import io

from slidepuzzle.backend.puzzle import PuzzleState
from slidepuzzle.client.launcher import main, parse_args, play, render_board, render_leaderboard
from slidepuzzle.client.session import PlaySession


def test_parse_args_defaults() -> None:
    args = parse_args([])

    assert args.server == "http://127.0.0.1:5009"
    assert args.start_server is False
    assert args.offline is False


def test_render_board_marks_selection_and_moves() -> None:
    session = PlaySession()
    session.click(4)

    board = render_board(session)

    assert board.splitlines()[1] == " 2  [5]  8 "
    assert "Moves: 0" in board


def test_render_leaderboard_handles_empty_list() -> None:
    assert render_leaderboard([]) == "No scores yet."
    line = render_leaderboard([{"rank": 1, "name": "Alice", "moves": 12, "date": "2024-03-15"}])
    assert line.startswith("#1")
    assert "12 moves" in line


def test_play_loop_solves_and_quits() -> None:
    session = PlaySession(puzzle=PuzzleState(grid=(2, 1, 3, 4, 5, 6, 7, 8, 9)))
    commands = iter(["0", "1", "9", "x", "q"])
    out = io.StringIO()

    play(session, read_line=lambda: next(commands), out=out)

    output = out.getvalue()
    assert session.puzzle.solved is True
    assert "Solved in 1 moves!" in output
    assert "Cell index must be between 0 and 8" in output


def test_offline_main_exits_cleanly_on_eof(monkeypatch) -> None:
    def eof(_prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)

    assert main(["--offline", "--name", "Alice Kumar", "--email", "cs22b1001@iiitdm.ac.in"]) == 0


def test_maybe_start_server_runs_uvicorn_app_factory(monkeypatch) -> None:
    from slidepuzzle.client import launcher

    started: list[list[str]] = []

    class _FakeProcess:
        def terminate(self) -> None:
            raise AssertionError("server should stay up")

    def _fake_popen(command, env):
        started.append(command)
        return _FakeProcess()

    monkeypatch.setattr(launcher.subprocess, "Popen", _fake_popen)
    monkeypatch.setattr(launcher, "wait_for_server", lambda server_url: True)

    process = launcher.maybe_start_server("http://127.0.0.1:5010")

    assert isinstance(process, _FakeProcess)
    assert started[0][2:5] == ["uvicorn", "--factory", "slidepuzzle.backend.api:build_app"]
    assert started[0][-4:] == ["--host", "127.0.0.1", "--port", "5010"]
