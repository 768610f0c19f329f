# adapters.py
"""
Collaborators the engine talks to: a drawing surface, a tick scheduler and a
key/value store for the high score. Protocols describe what the engine needs;
the small classes below are the implementations the game ships with.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Callable, Dict, Optional, Protocol, Tuple, Union

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
Stored = Union[str, int, float, None]


# -----------------------------------------------------------------------------
# Drawing
# -----------------------------------------------------------------------------
class DrawingContext(Protocol):
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float,
                    color: Color, width: int = 1) -> None: ...
    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None: ...


class Canvas(Protocol):
    width: int
    height: int

    def get_context(self) -> Optional[DrawingContext]: ...


# -----------------------------------------------------------------------------
# Scheduling
# -----------------------------------------------------------------------------
class TickScheduler(Protocol):
    def request(self, callback: Callable[[float], None]) -> int: ...
    def cancel(self, handle: int) -> None: ...


class FrameScheduler:
    """
    Animation-frame style scheduler. Callbacks requested now run once on the
    next run_pending() call; callbacks requested while running wait for the
    call after that.
    """

    def __init__(self):
        self._next_handle = 1
        self._pending: Dict[int, Callable[[float], None]] = {}

    def request(self, callback: Callable[[float], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run_pending(self, now_ms: float) -> int:
        """Run every callback queued before this call. Returns how many ran."""
        batch = list(self._pending.keys())
        ran = 0
        for handle in batch:
            # a callback earlier in the batch may have cancelled this one
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(now_ms)
            ran += 1
        return ran

    def __len__(self) -> int:
        return len(self._pending)


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------
class Storage(Protocol):
    def get(self, key: str) -> Stored: ...
    def set(self, key: str, value: Union[int, float]) -> None: ...


class MemoryStorage:
    """Dict-backed store; lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, Stored]] = None):
        self._data: Dict[str, Stored] = dict(initial or {})

    def get(self, key: str) -> Stored:
        return self._data.get(key)

    def set(self, key: str, value: Union[int, float]) -> None:
        self._data[key] = value


class FileStorage:
    """
    Keeps values in a small JSON object on disk. The file is created on the
    first write. Unreadable or malformed files raise; callers decide what to
    fall back to.
    """

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    def _load(self) -> Dict[str, Stored]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Stored:
        return self._load().get(key)

    def set(self, key: str, value: Union[int, float]) -> None:
        data = self._load()
        data[key] = value
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp, self.path)
        logger.debug("Saved %s=%r to %s", key, value, self.path)
