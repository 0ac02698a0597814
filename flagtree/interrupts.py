# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
OS signal helpers for Flagtree applications.

These helpers are independent of command parsing; actions use them to stop
long-running work or to dump thread stacks of a hung process.

- `cancel_on_signals`: A `threading.Event` that is set when any of the given
  signals arrives, for cooperative cancellation of an action's work.
- `new_signal_receiver`: A queue that receives the number of every delivered
  signal.
- `register_stack_trace_writer`: Writes the stack of every live thread to a
  text sink whenever one of the given signals arrives, until unregistered.

Python only lets the main thread install signal handlers, so all three must
be called from the main thread. Each returns a callable that restores the
previous handlers.
"""
from __future__ import annotations

import queue
import signal
import sys
import threading
import traceback
from typing import Any, Callable, TextIO

from flagtree.logger import logger

Unregister = Callable[[], None]


def _install(handler: Callable[[int, Any], None], signums: tuple[int, ...]) -> Unregister:
    """Install `handler` for every signal in `signums` and return a restorer."""
    if not signums:
        raise ValueError("At least one signal must be given")
    previous = {signum: signal.getsignal(signum) for signum in signums}
    for signum in signums:
        signal.signal(signum, handler)
    restored = False

    def unregister() -> None:
        nonlocal restored
        if restored:
            return
        restored = True
        for signum, old_handler in previous.items():
            signal.signal(signum, old_handler)

    return unregister


def cancel_on_signals(
    *signums: int, parent: threading.Event | None = None
) -> tuple[threading.Event, Unregister]:
    """
    Return an event that is set when any of `signums` is delivered.

    Args:
        *signums (int): Signals that cancel, e.g. `signal.SIGINT`, `signal.SIGTERM`.
        parent (threading.Event | None): An already-set parent makes the
            returned event start out set.

    Returns:
        tuple[threading.Event, Callable[[], None]]: The event and a `cancel`
        callable that sets the event and restores the previous handlers.
    """
    event = threading.Event()
    if parent is not None and parent.is_set():
        event.set()

    def handle(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, cancelling.", signal.Signals(signum).name)
        event.set()

    unregister = _install(handle, signums)

    def cancel() -> None:
        event.set()
        unregister()

    return event, cancel


def new_signal_receiver(*signums: int) -> queue.Queue[int]:
    """Return a queue that receives the number of each delivered signal."""
    receiver: queue.Queue[int] = queue.Queue()

    def handle(signum: int, _frame: Any) -> None:
        receiver.put(signum)

    _install(handle, signums)
    return receiver


def format_all_stacks() -> str:
    """Return the current stack of every live thread, one block per thread."""
    threads = {thread.ident: thread for thread in threading.enumerate()}
    blocks = []
    for ident, frame in sys._current_frames().items():
        thread = threads.get(ident)
        name = thread.name if thread is not None else "unknown"
        stack = "".join(traceback.format_stack(frame))
        blocks.append(f"thread {name} ({ident}):\n{stack}")
    return "\n".join(blocks)


def register_stack_trace_writer(out: TextIO, *signums: int) -> Unregister:
    """
    Write every thread's stack to `out` each time one of `signums` arrives.

    Args:
        out (TextIO): Sink for the stack dumps.
        *signums (int): Signals that trigger a dump, e.g. `signal.SIGQUIT`.

    Returns:
        Callable[[], None]: Stops further writes and restores the previous
        handlers.
    """
    active = True

    def handle(signum: int, _frame: Any) -> None:
        if not active:
            return
        logger.debug("Writing stack traces for signal %s.", signal.Signals(signum).name)
        out.write(format_all_stacks())
        out.write("\n")

    restore = _install(handle, signums)

    def unregister() -> None:
        nonlocal active
        active = False
        restore()

    return unregister
