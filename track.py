#!/usr/bin/env python3
"""CLI wrapper to track a selected region from the webcam and stream its centroid.

Start the ESP example (TcpInputStream on port 8001) first, then:
  python track.py
  python track.py --camera 1 --port 8001 --bins 16

Drag a rectangle in the window to start tracking; drag again to re-select.
"""
import argparse
import sys

from esp_vision import CamShiftTracker, CaptureError, TelemetryError, TrackerConfig


def build_parser():
    p = argparse.ArgumentParser(description='CamShift tracker streaming centroids over TCP')
    p.add_argument('--host', default='127.0.0.1', help='Telemetry server host')
    p.add_argument('--port', type=int, default=8001, help='Telemetry server port')
    p.add_argument('--camera', type=int, default=0, help='Camera index for cv2.VideoCapture')
    p.add_argument('--window', default='Window', help='Display window name')
    p.add_argument('--bins', type=int, default=16, help='Number of hue histogram bins')
    p.add_argument('--poll-ms', type=int, default=30, help='cv2.waitKey delay per frame (ms)')
    p.add_argument('--no-flip', action='store_true', help='Do not mirror the camera image')
    return p


def config_from_args(args):
    return TrackerConfig(
        host=args.host,
        port=args.port,
        camera_index=args.camera,
        window_name=args.window,
        hist_size=args.bins,
        poll_ms=args.poll_ms,
        flip_code=None if args.no_flip else 1,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    tracker = CamShiftTracker(config)
    try:
        frames = tracker.run()
    except TelemetryError as e:
        print(f"Error: {e}")
        return 1
    except CaptureError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0

    print(f"\n✅ Tracking finished. Total frames: {frames}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
