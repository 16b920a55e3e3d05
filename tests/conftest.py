import socket

import numpy as np
import pytest

from esp_vision import TrackerConfig, format_centroid

# Green block (hue 60) on a grey background (saturation 0, masked out)
FRAME_W, FRAME_H = 160, 120
BLOCK = (20, 30, 40, 20)


def make_frame(block=BLOCK, color=(0, 200, 0)):
    frame = np.full((FRAME_H, FRAME_W, 3), 128, dtype=np.uint8)
    x, y, w, h = block
    frame[y:y+h, x:x+w] = color
    return frame


class FakeTelemetry:
    def __init__(self):
        self.lines = []
        self.connected = True
        self.closed = False

    def connect(self):
        self.connected = True
        return self

    def send_centroid(self, cx, cy):
        self.lines.append(format_centroid(cx, cy))
        return True

    def close(self):
        self.closed = True


class FakeCapture:
    def __init__(self, frames, opened=True):
        self.frames = list(frames)
        self.opened = opened
        self.released = False

    def isOpened(self):
        return self.opened

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


class FakeDisplay:
    """Replays scripted mouse events and keys, one step per show() call"""

    def __init__(self, script=None):
        self.script = dict(script or {})
        self.on_mouse = None
        self.shown = 0
        self.closed = False

    def open(self, on_mouse):
        self.on_mouse = on_mouse

    def show(self, frame):
        self.shown += 1
        events, key = self.script.get(self.shown, ([], 255))
        for event, x, y in events:
            self.on_mouse(event, x, y, 0, None)
        return key

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    return TrackerConfig(flip_code=None)


@pytest.fixture
def frame():
    return make_frame()


@pytest.fixture
def telemetry():
    return FakeTelemetry()


@pytest.fixture
def unused_port():
    # Bind then release, so nothing is listening on the port
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]
