"""Terminal launcher for playing the slide puzzle against a local or remote API."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import time
from typing import Callable, TextIO

import httpx

from slidepuzzle.backend.errors import ValidationError

from .api import ApiError, connect
from .session import PlaySession

HELP_TEXT = "Enter a cell index 0-8 to select/swap, 'r' to restart, 'l' for the leaderboard, 'q' to quit."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Slide puzzle launcher")
    parser.add_argument("--server", default="http://127.0.0.1:5009")
    parser.add_argument("--name", default="")
    parser.add_argument("--email", default="")
    parser.add_argument("--start-server", action="store_true")
    parser.add_argument("--offline", action="store_true")
    return parser.parse_args(argv)


def wait_for_server(server_url: str, timeout_s: float = 8.0) -> bool:
    start = time.time()
    while time.time() - start < timeout_s:
        try:
            response = httpx.get(f"{server_url}/api/health", timeout=0.5)
            if response.status_code < 500:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(0.2)
    return False


def maybe_start_server(server_url: str) -> subprocess.Popen[str] | None:
    env = os.environ.copy()
    host_port = server_url.removeprefix("http://")
    host, port = host_port.split(":", maxsplit=1)
    command = [
        sys.executable,
        "-m",
        "uvicorn",
        "--factory",
        "slidepuzzle.backend.api:build_app",
        "--host",
        host,
        "--port",
        port,
    ]
    process = subprocess.Popen(command, env=env)
    if wait_for_server(server_url):
        return process
    process.terminate()
    return None


def render_board(session: PlaySession) -> str:
    state = session.puzzle
    rows = []
    for row in range(3):
        cells = []
        for col in range(3):
            index = row * 3 + col
            value = str(state.grid[index])
            cells.append(f"[{value}]" if state.selected == index else f" {value} ")
        rows.append(" ".join(cells))
    rows.append(f"Moves: {state.moves}")
    if state.solved:
        rows.append(f"Solved in {state.moves} moves!")
    if session.status_message:
        rows.append(session.status_message)
    return "\n".join(rows)


def render_leaderboard(entries: list[dict]) -> str:
    if not entries:
        return "No scores yet."
    return "\n".join(f"#{entry['rank']:<3} {entry['name']:<24} {entry['moves']:>4} moves  {entry['date']}" for entry in entries)


def play(session: PlaySession, read_line: Callable[[], str], out: TextIO) -> None:
    print(HELP_TEXT, file=out)
    print(render_board(session), file=out)
    while True:
        command = read_line().strip().lower()
        if command in {"q", "quit"}:
            return
        if command == "r":
            session.restart()
        elif command == "l":
            print(render_leaderboard(session.refresh_leaderboard()), file=out)
            continue
        elif command.isdigit():
            try:
                session.click(int(command))
            except ValidationError as exc:
                print(exc.message, file=out)
                continue
        else:
            print(HELP_TEXT, file=out)
            continue
        print(render_board(session), file=out)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    server_process: subprocess.Popen[str] | None = None
    session = PlaySession()
    if not args.offline:
        if args.start_server:
            server_process = maybe_start_server(args.server)
            if server_process is None:
                print("Server could not be started.", file=sys.stderr)
                return 1
        elif not wait_for_server(args.server):
            print("Server unreachable, playing offline. Start it with --start-server or uvicorn.", file=sys.stderr)
        session.api = connect(args.server)

    try:
        if args.name and args.email:
            try:
                player = session.sign_in(args.name, args.email)
            except (ValidationError, ApiError) as exc:
                print(exc.message, file=sys.stderr)
                return 1
            mode = "online" if player.online else "offline"
            print(f"Playing as {player.name} ({mode})")
        play(session, read_line=lambda: input("> "), out=sys.stdout)
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        if server_process is not None:
            server_process.terminate()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
