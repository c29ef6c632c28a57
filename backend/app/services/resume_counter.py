"""
Portfolio Backend — Resume Click Counter
==========================================

What:  Counts "download resume" clicks for the lifetime of the process.
How:   A single ResumeClickCounter instance owns the value; every mutation
       goes through a threading.Lock.

Lifecycle:
    Starts at 0 on import, resets on restart. Nothing is persisted, and each
    worker process keeps its own count.

The lock is a threading.Lock rather than an asyncio.Lock because FastAPI
runs sync dependencies and handlers in a thread pool; the critical section
never awaits, so holding it on the event loop thread is fine.
"""

import threading


class ResumeClickCounter:
    """Process-wide click counter with atomic increments."""

    def __init__(self, start: int = 0) -> None:
        self._lock = threading.Lock()
        self._count = start

    def increment(self) -> int:
        """Add one click and return the new total."""
        with self._lock:
            self._count += 1
            return self._count

    @property
    def value(self) -> int:
        with self._lock:
            return self._count

    def reset(self) -> None:
        with self._lock:
            self._count = 0


resume_click_counter = ResumeClickCounter()
