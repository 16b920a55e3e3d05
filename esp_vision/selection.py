"""
Mouse-driven region selection
The mouse callback fills a single-slot handoff that the tracking loop drains once per frame
"""
import threading
from enum import Enum
from typing import NamedTuple, Optional

import cv2


class Rect(NamedTuple):
    """Axis-aligned rectangle (x, y, width, height)"""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def is_valid(self):
        return self.width > 0 and self.height > 0

    def clip(self, frame_w, frame_h):
        """Intersect with the frame (0, 0, frame_w, frame_h)"""
        x1 = max(0, self.x)
        y1 = max(0, self.y)
        x2 = min(frame_w, self.x + self.width)
        y2 = min(frame_h, self.y + self.height)
        return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))


class MouseEvent(Enum):
    BUTTON_DOWN = 'button_down'
    BUTTON_UP = 'button_up'
    OTHER = 'other'

    @classmethod
    def from_cv2(cls, event):
        if event == cv2.EVENT_LBUTTONDOWN:
            return cls.BUTTON_DOWN
        if event == cv2.EVENT_LBUTTONUP:
            return cls.BUTTON_UP
        return cls.OTHER


class SelectionState:
    """Drag-to-select state shared between the mouse callback and the tracking loop.

    Button-down records the origin, button-up computes the extent and, when both
    width and height are positive, commits the rectangle into a one-slot handoff.
    The loop calls `take()` once per frame to consume it. A newer commit replaces
    one that has not been taken yet.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._origin_x, self._origin_y = 0, 0
        self._width, self._height = 0, 0
        self._committed: Optional[Rect] = None

    @property
    def pending(self):
        with self._lock:
            return Rect(self._origin_x, self._origin_y, self._width, self._height)

    @property
    def ready(self):
        with self._lock:
            return self._committed is not None

    def handle(self, event, x, y):
        """Apply one decoded MouseEvent at pixel (x, y)"""
        if event is MouseEvent.BUTTON_DOWN:
            with self._lock:
                # width / height stay stale until button-up
                self._origin_x, self._origin_y = x, y

        elif event is MouseEvent.BUTTON_UP:
            with self._lock:
                self._width = x - self._origin_x
                self._height = y - self._origin_y
                rect = Rect(self._origin_x, self._origin_y, self._width, self._height)
                if rect.is_valid():
                    self._committed = rect

    def on_mouse(self, event, x, y, flags, param):
        """cv2.setMouseCallback entry point"""
        self.handle(MouseEvent.from_cv2(event), x, y)

    def take(self):
        """Return the committed selection and clear the slot, or None"""
        with self._lock:
            rect, self._committed = self._committed, None
            return rect
