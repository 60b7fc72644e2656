from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from treecard_hand.capture import CameraLoop, open_camera  # noqa: E402
from treecard_hand.config import load_config  # noqa: E402
from treecard_hand.detector import HandLandmarkSource  # noqa: E402
from treecard_hand.drawing import draw_overlay  # noqa: E402
from treecard_hand.events import GestureCallbacks  # noqa: E402
from treecard_hand.session import GestureSession  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Webcam gesture control demo (prints scene events).")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=640, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=480, help="Capture height (best effort)")
    ap.add_argument("--config", default="config.json", help="JSON gesture config (optional)")
    ap.add_argument("--pan", type=float, default=None, help="Pan sensitivity override")
    ap.add_argument("--zoom", type=float, default=None, help="Zoom sensitivity override")
    ap.add_argument("--debug", action="store_true", help="Show camera window with landmarks and gesture status")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config, pan_sensitivity=args.pan, zoom_sensitivity=args.zoom, debug=args.debug or None)

    status = {"text": ""}

    def on_status(text: str) -> None:
        status["text"] = text
        print(f"[status] {text}")

    callbacks = GestureCallbacks(
        on_gesture=lambda label: print(f"[gesture] {label}"),
        on_pinch=lambda x, y: print(f"[pinch] x={x:.3f} y={y:.3f}"),
        on_palm_move=lambda dx, dy: print(f"[pan] dx={dx:+.3f} dy={dy:+.3f}"),
        on_zoom=lambda d: print(f"[zoom] {d:+.4f}"),
        on_status=on_status,
    )
    session = GestureSession(callbacks, config)

    session.report_status("LOADING AI...")
    try:
        source = HandLandmarkSource()
    except RuntimeError as e:
        session.report_status("AI ERROR")
        print(e, file=sys.stderr)
        return 1

    session.report_status("REQUESTING CAMERA...")
    try:
        cap = open_camera(args.camera, args.width, args.height)
    except RuntimeError as e:
        session.report_status("NO CAMERA")
        source.close()
        print(e, file=sys.stderr)
        return 1
    session.report_status("AI READY")

    loop = None

    def on_frame(frame, landmarks) -> None:
        if not config.debug:
            return
        trail = list(session.state.motion.position_history)
        view = draw_overlay(frame, landmarks, status=status["text"], palm_trail=trail)
        cv2.imshow("treecard - gesture control", view)
        key = cv2.waitKey(1) & 0xFF
        if key in (ord("q"), 27):
            loop.stop()

    loop = CameraLoop(session, source, cap, on_frame=on_frame)
    print("Press Ctrl+C (or q in the debug window) to quit")
    try:
        loop.run()
    except KeyboardInterrupt:
        loop.stop()

    if config.debug:
        cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
