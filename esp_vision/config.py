"""
Tracker configuration
All tunables of the capture -> CamShift -> telemetry loop in one place
"""
from dataclasses import dataclass

import cv2
import numpy as np


@dataclass
class TrackerConfig:
    # Telemetry peer (ESP TcpInputStream)
    host: str = '127.0.0.1'
    port: int = 8001

    # Capture / display
    camera_index: int = 0
    window_name: str = 'Window'
    poll_ms: int = 30                 # cv2.waitKey delay, also dispatches mouse events
    flip_code: int | None = 1         # 1 = mirror around the y axis, None = no flip
    line_thickness: int = 2

    # Hue histogram
    hist_size: int = 16
    hue_range: tuple = (0, 180)

    # Saturation / value mask, pixels outside are ignored
    sat_min: int = 30
    val_min: int = 10
    sat_max: int = 256
    val_max: int = 256

    # CamShift termination: whichever comes first
    max_iter: int = 10
    epsilon: float = 1

    def __post_init__(self):
        if self.hist_size <= 0:
            raise ValueError(f"hist_size must be positive, got {self.hist_size}")
        if self.max_iter <= 0:
            raise ValueError(f"max_iter must be positive, got {self.max_iter}")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {self.epsilon}")
        if self.poll_ms <= 0:
            raise ValueError(f"poll_ms must be positive, got {self.poll_ms}")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")
        if self.flip_code not in (None, -1, 0, 1):
            raise ValueError(f"Unknown flip_code: {self.flip_code}")
        lo, hi = self.hue_range
        if not 0 <= lo < hi:
            raise ValueError(f"Invalid hue_range: {self.hue_range}")

    def term_criteria(self):
        return (cv2.TERM_CRITERIA_EPS | cv2.TERM_CRITERIA_COUNT, self.max_iter, self.epsilon)

    def hsv_lower(self):
        return np.array((float(self.hue_range[0]), float(self.sat_min), float(self.val_min)))

    def hsv_upper(self):
        return np.array((float(self.hue_range[1]), float(self.sat_max), float(self.val_max)))
