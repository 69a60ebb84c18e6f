"""Event loop helpers for running scans from synchronous entry points."""

import asyncio
import signal
import sys
import threading
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar, cast

T = TypeVar("T")


def _cancel_all_tasks(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel all pending tasks on the event loop."""
    tasks = asyncio.all_tasks(loop)
    for task in tasks:
        task.cancel()

    if tasks:
        loop.run_until_complete(asyncio.gather(*tasks, return_exceptions=True))


def _shutdown_asyncgens(loop: asyncio.AbstractEventLoop) -> None:
    """Shutdown all async generators."""
    try:
        loop.run_until_complete(loop.shutdown_asyncgens())
    except RuntimeError:
        pass


def _can_install_signals() -> bool:
    return sys.platform != "win32" and threading.current_thread() is threading.main_thread()


def _run_in_fresh_loop(
    coro: Coroutine[Any, Any, T],
    on_interrupt: Callable[[], None] | None = None,
) -> T:
    """Run a coroutine in a new loop, routing Ctrl-C to ``on_interrupt``.

    The first SIGINT calls ``on_interrupt`` (when given) so the coroutine can
    wind down on its own; a second one, or any SIGINT without a callback,
    cancels every task and surfaces as KeyboardInterrupt.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    original_sigint = None
    interrupts = 0

    def cancel_tasks() -> None:
        for task in asyncio.all_tasks(loop):
            task.cancel()

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal interrupts
        interrupts += 1
        if on_interrupt is not None and interrupts == 1:
            loop.call_soon_threadsafe(on_interrupt)
        else:
            loop.call_soon_threadsafe(cancel_tasks)

    if _can_install_signals():
        original_sigint = signal.signal(signal.SIGINT, signal_handler)

    try:
        return loop.run_until_complete(coro)
    except asyncio.CancelledError:
        if interrupts:
            raise KeyboardInterrupt from None
        raise
    finally:
        try:
            _cancel_all_tasks(loop)
            _shutdown_asyncgens(loop)
        finally:
            asyncio.set_event_loop(None)
            loop.close()

        if original_sigint is not None:
            signal.signal(signal.SIGINT, original_sigint)


def safe_async_run(
    coro: Coroutine[Any, Any, T],
    on_interrupt: Callable[[], None] | None = None,
) -> T:
    """
    Run an async coroutine to completion from synchronous code.

    If an event loop is already running in this thread (e.g. pytest-asyncio),
    the coroutine is executed in a separate thread with its own event loop.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return _run_in_fresh_loop(coro, on_interrupt)

    result: T | None = None
    error: BaseException | None = None

    def _runner() -> None:
        nonlocal result, error
        try:
            result = _run_in_fresh_loop(coro, on_interrupt)
        except BaseException as exc:
            error = exc

    thread = threading.Thread(target=_runner, daemon=True)
    thread.start()
    thread.join()

    if error is not None:
        raise error

    return cast(T, result)
