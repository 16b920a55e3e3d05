"""
Feature extraction for CamShift tracking
Hue channel, saturation/value mask, hue histogram and back-projection
"""
import cv2


def compute_hue_and_mask(frame, config):
    """
    Split a BGR frame into its hue channel and a validity mask

    Pixels whose saturation or value fall below the configured minimums carry
    unreliable hue and are masked out.

    Returns:
        hue: uint8 array (H, W)
        mask: uint8 array (H, W), 255 where the pixel is usable
    """
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    hue = cv2.split(hsv)[0]
    mask = cv2.inRange(hsv, config.hsv_lower(), config.hsv_upper())
    return hue, mask


def extract_hue_histogram(hue, mask, roi, config):
    x, y, w, h = roi
    hue_roi = hue[y:y+h, x:x+w]
    mask_roi = mask[y:y+h, x:x+w]

    hist = cv2.calcHist([hue_roi], [0], mask_roi, [config.hist_size], list(config.hue_range))

    # Normalize to [0, 255]
    cv2.normalize(hist, hist, 0, 255, cv2.NORM_MINMAX)
    return hist


def compute_backprojection(hue, hist, config):
    return cv2.calcBackProject([hue], [0], hist, list(config.hue_range), 1)


def masked_backprojection(hue, mask, hist, config):
    """Back-projection restricted to pixels that pass the saturation/value mask"""
    dst = compute_backprojection(hue, hist, config)
    return cv2.bitwise_and(dst, mask)
