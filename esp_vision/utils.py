"""
Utility functions for tracking
"""
import cv2
import numpy as np

from .selection import Rect


def bounding_rect(track_box):
    """Axis-aligned bounding rectangle of a rotated box ((cx, cy), (w, h), angle)"""
    pts = cv2.boxPoints(track_box)
    return Rect(*cv2.boundingRect(pts))


def centroid(rect):
    """Integer center of a rectangle, no sub-pixel precision"""
    x, y, w, h = rect
    return x + w // 2, y + h // 2


def draw_rect(frame, rect, color=(255, 0, 0), thickness=2):
    """Draw rect onto frame in place"""
    x, y, w, h = rect
    cv2.rectangle(frame, (int(x), int(y)), (int(x + w), int(y + h)), color, thickness)
    return frame


def draw_box(frame, track_box, color=(0, 0, 255), thickness=2):
    """Draw the rotated CamShift box onto frame in place"""
    pts = cv2.boxPoints(track_box).astype(np.int32)
    cv2.polylines(frame, [pts], True, color, thickness)
    return frame
