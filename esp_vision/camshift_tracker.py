import cv2
import numpy as np
from dataclasses import dataclass

from .config import TrackerConfig
from .selection import Rect, SelectionState


class CaptureError(RuntimeError):
    """The camera could not be opened or stopped delivering frames"""


@dataclass
class TrackState:
    track_window: Rect | None = None           # (x, y, w, h), seed for the next CamShift run
    model: np.ndarray | None = None            # normalized hue histogram
    is_tracking: bool = False                  # Idle -> Tracking, never back

    # Last CamShift output, kept for visualization
    track_box: tuple | None = None             # ((cx, cy), (w, h), angle)
    bounding: Rect | None = None


class TrackerStrategy:
    def init(self, state: TrackState, hue, mask, roi): ...
    def update(self, state: TrackState, hue, mask) -> Rect: ...  # return new window


class CamShiftStrategy(TrackerStrategy):
    def __init__(self, config: TrackerConfig, *,
                 extract_hue_histogram=None, masked_backprojection=None, bounding_rect=None):
        self.config = config
        self.extract_hue_histogram = extract_hue_histogram
        self.masked_backprojection = masked_backprojection
        self.bounding_rect = bounding_rect

    def init(self, state: TrackState, hue, mask, roi):
        # A new selection always replaces the model, even mid-track
        state.model = self.extract_hue_histogram(hue, mask, roi, self.config)
        state.track_window = Rect(*roi)
        state.track_box = None
        state.bounding = None
        state.is_tracking = True

    def update(self, state: TrackState, hue, mask):
        dst = self.masked_backprojection(hue, mask, state.model, self.config)
        track_box, _ = cv2.CamShift(dst, tuple(state.track_window), self.config.term_criteria())

        # The bounding box of the rotated result seeds the next frame verbatim
        bounding = self.bounding_rect(track_box)
        state.track_box = track_box
        state.bounding = bounding
        state.track_window = bounding
        return bounding


class CamShiftTracker:
    __slots__ = ('config', 'state', 'selection', 'strategy', 'telemetry', 'capture', 'display',
                 'frame_count', 'compute_hue_and_mask', 'draw_rect', 'draw_box', 'centroid')

    def __init__(self, config=None, telemetry=None, capture=None, display=None, strategy=None):
        self.config = config if config is not None else TrackerConfig()
        self.state = TrackState()
        self.selection = SelectionState()
        self.frame_count = 0

        from .features import compute_hue_and_mask, extract_hue_histogram, masked_backprojection
        from .utils import bounding_rect, centroid, draw_box, draw_rect

        self.strategy = strategy if strategy is not None else CamShiftStrategy(
            self.config,
            extract_hue_histogram=extract_hue_histogram,
            masked_backprojection=masked_backprojection,
            bounding_rect=bounding_rect,
        )
        self.compute_hue_and_mask = compute_hue_and_mask
        self.draw_rect = draw_rect
        self.draw_box = draw_box
        self.centroid = centroid

        # Collaborators are created lazily in open() unless injected
        self.telemetry = telemetry
        self.capture = capture
        self.display = display

    @property
    def is_tracking(self):
        return self.state.is_tracking

    def open(self):
        from .telemetry import TelemetryClient
        from .display import DisplayWindow

        if self.telemetry is None:
            self.telemetry = TelemetryClient(self.config.host, self.config.port)
        if not self.telemetry.connected:
            self.telemetry.connect()

        if self.capture is None:
            self.capture = cv2.VideoCapture(self.config.camera_index)
        if not self.capture.isOpened():
            raise CaptureError(f"Cannot open camera {self.config.camera_index}")

        if self.display is None:
            self.display = DisplayWindow(self.config.window_name, self.config.poll_ms)
        self.display.open(self.selection.on_mouse)

    def process_frame(self, frame):
        """
        Run one iteration of the tracking loop on a raw camera frame

        Returns:
            frame_with_box: the flipped frame with selection / tracking rectangles drawn
            point: (cx, cy) sent to telemetry, or None while idle
        """
        if self.config.flip_code is not None:
            frame = cv2.flip(frame, self.config.flip_code)
        else:
            frame = frame.copy()

        hue, mask = self.compute_hue_and_mask(frame, self.config)

        selection = self.selection.take()
        if selection is not None:
            h, w = frame.shape[:2]
            roi = selection.clip(w, h)
            if roi.is_valid():
                print("Initialize tracking, setting up CAMShift search")
                self.strategy.init(self.state, hue, mask, roi)
                self.draw_rect(frame, roi, color=(0, 255, 0), thickness=self.config.line_thickness)

        point = None
        if self.state.is_tracking:
            bounding = self.strategy.update(self.state, hue, mask)
            self.draw_rect(frame, bounding, color=(255, 0, 0), thickness=self.config.line_thickness)
            self.draw_box(frame, self.state.track_box, color=(0, 0, 255), thickness=self.config.line_thickness)
            point = self.centroid(bounding)
            if self.telemetry is not None:
                self.telemetry.send_centroid(*point)

        return frame, point

    def run(self):
        """Open everything, then track until the user quits or the camera fails"""
        try:
            self.open()
            print("Drag a rectangle around the object to track it")
            print("Press 'q' or 'ESC' to exit")

            while True:
                ret, frame = self.capture.read()
                if not ret or frame is None:
                    raise CaptureError("Cannot read frame from camera")

                frame_with_box, _ = self.process_frame(frame)
                self.frame_count += 1

                key = self.display.show(frame_with_box)
                if key in (27, ord('q')):
                    print("\nTracking stopped by user")
                    break
        finally:
            self.close()

        return self.frame_count

    def close(self):
        if self.capture is not None:
            self.capture.release()
        if self.display is not None:
            self.display.close()
        if self.telemetry is not None:
            self.telemetry.close()
