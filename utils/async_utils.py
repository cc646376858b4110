"""
Async utilities for the Quick Folder Launcher
"""

import asyncio
import threading
import time
import logging
from typing import Callable, Any, Optional, Set
from concurrent.futures import ThreadPoolExecutor
import functools

# Set up logging
logger = logging.getLogger(__name__)

# Global thread pool executor for blocking filesystem and process work
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="async_worker")


async def run_in_executor(func: Callable, *args, **kwargs) -> Any:
    """
    Run a synchronous function in the thread pool executor

    Raises:
        RuntimeError: If no event loop is running
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as e:
        logger.error("No event loop available for run_in_executor")
        raise RuntimeError("No async event loop available") from e

    bound_func = functools.partial(func, *args, **kwargs)
    return await loop.run_in_executor(_executor, bound_func)


class ImprovedAsyncTaskManager:
    """
    Task manager for running async commands from a tkinter application
    - Event loop lives in a background thread
    - Task lifecycle tracking
    - Errors are logged, never lost
    """

    def __init__(self):
        self._tasks: Set[asyncio.Future] = set()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._shutdown_requested = False
        self._loop_ready = threading.Event()

    def setup_event_loop(self):
        """Setup event loop in background thread"""
        if self._shutdown_requested or self._thread is not None:
            return

        def run_event_loop():
            """Run the event loop in a background thread"""
            try:
                self._loop = asyncio.new_event_loop()

                def handle_exception(loop, context):
                    exception = context.get("exception")
                    if exception and not isinstance(
                        exception, asyncio.CancelledError
                    ):
                        logger.error(
                            "Async task exception: %s", exception, exc_info=exception
                        )
                    elif not exception:
                        logger.error(
                            "Async task error: %s", context.get("message", "Unknown")
                        )

                self._loop.set_exception_handler(handle_exception)
                self._loop_ready.set()

                logger.info("Async event loop thread started")
                self._loop.run_forever()

            except Exception:
                logger.exception("Critical error in event loop thread")
                self._loop_ready.set()  # Signal even on error to prevent deadlock
            finally:
                if self._loop and not self._loop.is_closed():
                    pending = asyncio.all_tasks(self._loop)
                    for task in pending:
                        task.cancel()
                    self._loop.close()

                logger.info("Async event loop thread ended")

        self._thread = threading.Thread(
            target=run_event_loop, daemon=True, name="AsyncEventLoop"
        )
        self._thread.start()

        if not self._loop_ready.wait(timeout=5.0):
            raise RuntimeError("Failed to start async event loop within timeout")

        if self._loop is None:
            raise RuntimeError("Failed to create async event loop")

    def run_task(
        self, coro, callback: Optional[Callable] = None, task_name: Optional[str] = None
    ) -> asyncio.Future:
        """
        Run an async task in the background thread

        Args:
            coro: Coroutine to run
            callback: Optional callback function called with (result, error)
            task_name: Optional name for the task (for debugging)

        Returns:
            Future object representing the task

        Raises:
            RuntimeError: If task manager is shutting down
        """
        if self._shutdown_requested:
            raise RuntimeError("Task manager is shutting down")

        if not self._loop or self._loop.is_closed():
            self.setup_event_loop()

        async def wrapped_coro():
            try:
                return await coro
            except asyncio.CancelledError:
                logger.debug("Task cancelled: %s", task_name or "unnamed")
                raise
            except Exception as e:
                logger.exception("Error in task %s: %s", task_name or "unnamed", e)
                raise

        future = asyncio.run_coroutine_threadsafe(wrapped_coro(), self._loop)
        self._tasks.add(future)

        def cleanup_and_callback(completed_future):
            """Handle task completion with proper cleanup"""
            self._tasks.discard(completed_future)

            if not callback:
                return
            if completed_future.cancelled():
                callback(None, asyncio.CancelledError("Task was cancelled"))
                return
            error = completed_future.exception()
            if error is not None:
                callback(None, error)
            else:
                callback(completed_future.result(), None)

        future.add_done_callback(cleanup_and_callback)
        return future

    def get_task_count(self) -> int:
        """Get current number of tracked tasks"""
        completed = {task for task in self._tasks if task.done()}
        self._tasks -= completed
        return len(self._tasks)

    def shutdown(self, timeout: float = 5.0):
        """Shutdown the task manager, cancelling anything still running"""
        logger.info("Shutting down async task manager")
        self._shutdown_requested = True

        for task in self._tasks.copy():
            if not task.done():
                task.cancel()
        self._tasks.clear()

        if self._loop and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning(
                    "Event loop thread did not shut down cleanly within %fs", timeout
                )

        self._loop = None
        self._thread = None
        self._loop_ready.clear()


# Global task manager instance used by the desktop window
task_manager = ImprovedAsyncTaskManager()


def shutdown_all(timeout: float = 5.0):
    """Shutdown all async resources with timeout"""
    logger.info("Shutting down all async resources")
    start = time.time()
    task_manager.shutdown(timeout=timeout)
    _executor.shutdown(wait=False)
    logger.debug("Async shutdown took %.2fs", time.time() - start)
