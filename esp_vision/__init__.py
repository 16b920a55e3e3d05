"""
CamShift region tracking with centroid streaming to ESP
"""
from .camshift_tracker import CamShiftTracker, CamShiftStrategy, TrackState, CaptureError
from .config import TrackerConfig
from .selection import Rect, MouseEvent, SelectionState
from .telemetry import TelemetryClient, TelemetryError, format_centroid
from .utils import bounding_rect, centroid, draw_box, draw_rect
from .features import (
    compute_hue_and_mask,
    extract_hue_histogram,
    compute_backprojection,
    masked_backprojection
)

__all__ = [
    'CamShiftTracker',
    'CamShiftStrategy',
    'TrackState',
    'CaptureError',
    'TrackerConfig',
    'Rect',
    'MouseEvent',
    'SelectionState',
    'TelemetryClient',
    'TelemetryError',
    'format_centroid',
    'bounding_rect',
    'centroid',
    'draw_rect',
    'draw_box',
    'compute_hue_and_mask',
    'extract_hue_histogram',
    'compute_backprojection',
    'masked_backprojection'
]
