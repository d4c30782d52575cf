# src/chainpiper_shell/core/loop_runner.py
from __future__ import annotations

import asyncio
import threading
from typing import Any, Coroutine, Optional

_MAIN_LOOP: Optional[asyncio.AbstractEventLoop] = None
_THREAD: Optional[threading.Thread] = None


def ensure_background_loop() -> None:
    """
    Ensures a persistent asyncio event loop is running on a background thread.
    Command runners may keep connections on this loop between console lines.
    """
    global _MAIN_LOOP, _THREAD
    if _MAIN_LOOP is not None:
        return

    loop = asyncio.new_event_loop()

    def _run_loop(loop_: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop_)
        loop_.run_forever()

    t = threading.Thread(target=_run_loop, args=(loop,), daemon=True, name="chainpiper-loop")
    t.start()

    _MAIN_LOOP = loop
    _THREAD = t


def stop_background_loop() -> None:
    """Stops the background loop (if any) and waits for its thread to finish."""
    global _MAIN_LOOP, _THREAD
    if _MAIN_LOOP is None:
        return
    _MAIN_LOOP.call_soon_threadsafe(_MAIN_LOOP.stop)
    if _THREAD is not None:
        _THREAD.join(timeout=2)
    if not _MAIN_LOOP.is_running():
        _MAIN_LOOP.close()
    _MAIN_LOOP, _THREAD = None, None


def run_on_main_loop(coro: Coroutine[Any, Any, Any], timeout: float | None = None) -> Any:
    """
    Executes a coroutine on the persistent background loop and waits for the result.
    Falls back to asyncio.run() if no background loop exists (e.g. in tests).

    Args:
        coro: The coroutine to execute.
        timeout (float | None): Optional timeout in seconds to wait for the result.

    Returns:
        Any: The result of the coroutine.
    """
    if _MAIN_LOOP is not None:
        fut = asyncio.run_coroutine_threadsafe(coro, _MAIN_LOOP)
        return fut.result(timeout)

    return asyncio.run(coro)
