"""
OpenCV HighGUI window binding
"""
import cv2


class DisplayWindow:
    def __init__(self, name='Window', poll_ms=30):
        self.name = name
        self.poll_ms = poll_ms
        self._open = False

    def open(self, on_mouse):
        cv2.namedWindow(self.name, cv2.WINDOW_AUTOSIZE)
        cv2.setMouseCallback(self.name, on_mouse)
        self._open = True

    def show(self, frame):
        """Render the frame and poll; queued mouse callbacks fire inside waitKey"""
        cv2.imshow(self.name, frame)
        return cv2.waitKey(self.poll_ms) & 0xFF

    def close(self):
        if self._open:
            cv2.destroyWindow(self.name)
            cv2.waitKey(1)
            self._open = False
