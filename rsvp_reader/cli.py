"""Command-line RSVP player.

WHY: The engine needs a runnable front-end for reading a text file at a
given rate straight from the terminal, and a way to exercise playback,
navigation, and position sync end to end without a GUI.

HOW: argparse collects the input file, rate, resume position, and sync
options. The player runs inside asyncio.run(): an AsyncioScheduler
drives the controller, every RenderFrame is painted on one terminal
line, and a PositionSyncPolicy reports positions to a
LoggingPositionSink. With --interactive, a daemon thread reads command
lines from stdin and hands them to the event loop thread-safely.

RULES:
- Positional argument: text file path, or "-" for stdin
- Status and log output goes to stderr; the word line goes to stdout
- Exit codes: 0 finished or quit, 1 input/validation error, 130 Ctrl+C
- Ctrl+C pauses first, so the stop position is flushed to the sink and
  the resume hint is still printed
- --interactive cannot be combined with reading the text from stdin
- In interactive mode the player keeps running after the last word
  (so "r" can restart) until "q" or end of input
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional, TextIO

from pydantic import ValidationError

from rsvp_reader import __version__
from rsvp_reader.config import AUTO_SAVE_EVERY, DEFAULT_WPM, LOG_LEVEL
from rsvp_reader.core.timing import estimate_remaining_ms
from rsvp_reader.models import InitialState, ReaderSettings
from rsvp_reader.playback.commands import LINE_COMMANDS, dispatch, resolve
from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.scheduler import AsyncioScheduler
from rsvp_reader.playback.state import PlaybackStatus, RenderFrame
from rsvp_reader.render import format_frame
from rsvp_reader.sync.policy import PositionSyncPolicy
from rsvp_reader.sync.sinks import LoggingPositionSink

logger = logging.getLogger(__name__)

_QUIT_COMMANDS = frozenset({"q", "quit", "exit"})


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not interleave with the word line on stdout.
    """
    print(msg, file=sys.stderr, flush=True)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer, got {}".format(value))
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0, got {}".format(value))
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rsvp-reader",
        description="Read a text file one word at a time (RSVP) in the terminal.",
    )
    parser.add_argument("file", help="Text file to read, or '-' for stdin.")
    parser.add_argument(
        "--wpm", type=_positive_int, default=DEFAULT_WPM,
        help="Reading rate in words per minute (default: %(default)s).",
    )
    parser.add_argument(
        "--start", type=_non_negative_int, default=0,
        help="Word index to resume from (default: 0).",
    )
    parser.add_argument(
        "--reading-id", default=None,
        help="Identifier reported with saved positions (default: file stem).",
    )
    parser.add_argument(
        "--auto-save-every", type=_positive_int, default=AUTO_SAVE_EVERY,
        help="Save the position every N words (default: %(default)s).",
    )
    parser.add_argument(
        "--interactive", action="store_true",
        help="Read commands from stdin: p/<enter> toggle, < > sentence, + - rate, r restart, q quit.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log position saves.")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    return parser


def _read_text(path_arg: str) -> str:
    if path_arg == "-":
        return sys.stdin.read()
    return Path(path_arg).read_text(encoding="utf-8")


def _print_resume_hint(sink: LoggingPositionSink) -> None:
    """Tell the user which flags continue from the last synced position."""
    if sink.last_saved is None:
        return
    _, position, rate = sink.last_saved
    _status("Stopped at word {}. Resume with: --start {} --wpm {}".format(position, position, rate))


def _start_command_reader(
    loop: asyncio.AbstractEventLoop,
    queue: "asyncio.Queue[Optional[str]]",
    stream: TextIO,
) -> threading.Thread:
    """Read lines on a daemon thread and post them to the loop's queue.

    A daemon thread is used instead of run_in_executor so a blocked
    readline() never holds up interpreter shutdown. None marks EOF.
    """

    def _reader() -> None:
        for line in stream:
            loop.call_soon_threadsafe(queue.put_nowait, line.rstrip("\r\n"))
        loop.call_soon_threadsafe(queue.put_nowait, None)

    thread = threading.Thread(target=_reader, name="rsvp-commands", daemon=True)
    thread.start()
    return thread


async def _handle_commands(
    controller: PlaybackController,
    queue: "asyncio.Queue[Optional[str]]",
    done: asyncio.Event,
) -> None:
    while not done.is_set():
        line = await queue.get()
        if line is None:
            return
        if line.strip().lower() in _QUIT_COMMANDS:
            done.set()
            return
        if resolve(line, LINE_COMMANDS) is None:
            _status("\nUnknown command {!r}".format(line))
            continue
        dispatch(controller, line, LINE_COMMANDS)


async def play_text(
    text: str,
    reading_id: str,
    initial: InitialState,
    settings: ReaderSettings,
    out: TextIO,
    color: bool = True,
    commands: Optional[TextIO] = None,
    sink: Optional[LoggingPositionSink] = None,
) -> LoggingPositionSink:
    """Play ``text`` to ``out`` until it finishes or the user quits.

    Returns:
        The sink, whose ``last_saved`` holds the final synced position.
    """
    scheduler = AsyncioScheduler()
    controller = initial.build_controller(scheduler)
    if sink is None:
        sink = LoggingPositionSink()
    policy = PositionSyncPolicy(
        sink,
        reading_id,
        every_n_words=settings.auto_save_every,
        scheduler=scheduler,
    )
    done = asyncio.Event()

    def _paint(frame: RenderFrame) -> None:
        out.write(format_frame(frame, color=color))
        out.flush()
        if frame.status == PlaybackStatus.FINISHED and commands is None:
            done.set()

    controller.subscribe(_paint)
    policy.attach(controller)
    _paint(controller.frame())

    remaining_s = estimate_remaining_ms(controller.words, controller.current_index, controller.rate_wpm) / 1000.0
    logger.info("Reading %d words, about %.0fs at %d wpm", controller.total_words, remaining_s, controller.rate_wpm)

    command_task = None
    if commands is not None:
        queue: asyncio.Queue[Optional[str]] = asyncio.Queue()
        _start_command_reader(asyncio.get_running_loop(), queue, commands)
        command_task = asyncio.create_task(_handle_commands(controller, queue, done))
        command_task.add_done_callback(lambda _t: done.set())

    controller.play()
    if controller.status != PlaybackStatus.PLAYING and commands is None:
        done.set()

    try:
        await done.wait()
    finally:
        controller.close()
        policy.cancel_debounce()
        if command_task is not None:
            command_task.cancel()
        out.write("\n")
        out.flush()
        logger.info("Synced position for %s %d time(s)", reading_id, policy.saves)

    return sink


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.interactive and args.file == "-":
        _status("Error: --interactive reads commands from stdin; pass a file path for the text.")
        return 1

    try:
        text = _read_text(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        _status("Error: cannot read {}: {}".format(args.file, exc))
        return 1

    reading_id = args.reading_id or ("stdin" if args.file == "-" else Path(args.file).stem)

    try:
        settings = ReaderSettings(default_wpm=args.wpm, auto_save_every=args.auto_save_every)
        initial = InitialState(text=text, resume_position=args.start, resume_rate_wpm=args.wpm)
    except ValidationError as exc:
        _status("Error: {}".format(exc))
        return 1

    sink = LoggingPositionSink()
    try:
        asyncio.run(play_text(
            text,
            reading_id,
            initial,
            settings,
            out=sys.stdout,
            color=not args.no_color and sys.stdout.isatty(),
            commands=sys.stdin if args.interactive else None,
            sink=sink,
        ))
    except KeyboardInterrupt:
        _status("Interrupted.")
        _print_resume_hint(sink)
        return 130

    _print_resume_hint(sink)
    return 0


if __name__ == "__main__":
    sys.exit(main())
