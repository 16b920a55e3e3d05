import cv2
import numpy as np

from esp_vision.display import DisplayWindow


def test_window_lifecycle(monkeypatch):
    calls = []
    monkeypatch.setattr(cv2, 'namedWindow', lambda name, flags: calls.append(('named', name, flags)))
    monkeypatch.setattr(cv2, 'setMouseCallback', lambda name, cb: calls.append(('mouse', name, cb)))
    monkeypatch.setattr(cv2, 'imshow', lambda name, frame: calls.append(('show', name)))
    monkeypatch.setattr(cv2, 'waitKey', lambda delay: calls.append(('wait', delay)) or 0x171)
    monkeypatch.setattr(cv2, 'destroyWindow', lambda name: calls.append(('destroy', name)))

    def on_mouse(event, x, y, flags, param):
        pass

    window = DisplayWindow('Window', poll_ms=30)
    window.open(on_mouse)
    key = window.show(np.zeros((4, 4, 3), np.uint8))
    window.close()
    window.close()

    assert key == 0x71
    assert calls[:4] == [
        ('named', 'Window', cv2.WINDOW_AUTOSIZE),
        ('mouse', 'Window', on_mouse),
        ('show', 'Window'),
        ('wait', 30),
    ]
    assert calls.count(('destroy', 'Window')) == 1
