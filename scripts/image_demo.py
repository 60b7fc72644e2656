from __future__ import annotations

import argparse
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from treecard_hand.classifier import classify_features  # noqa: E402
from treecard_hand.detector import HandLandmarkSource  # noqa: E402
from treecard_hand.drawing import draw_overlay  # noqa: E402
from treecard_hand.features import extract_features  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Classify the hand gesture in a single image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", default=None, help="Path to output image (annotated)")
    args = ap.parse_args()

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    with HandLandmarkSource() as source:
        landmarks = source.detect(frame, 0.0)

    features = extract_features(landmarks)
    label = classify_features(features)
    print(f"gesture: {label.value}")
    if features is not None:
        f = features.fingers
        print(
            f"fingers thumb={f.thumb} index={f.index} middle={f.middle} ring={f.ring} pinky={f.pinky} "
            f"pinch={features.pinch_distance:.3f} thumb_dir={features.thumb_direction.value} "
            f"palm_center=({features.palm_center[0]:.3f}, {features.palm_center[1]:.3f})"
        )

    if args.out:
        out = draw_overlay(frame, landmarks, status=label.value, mirror=False)
        if not cv2.imwrite(args.out, out):
            raise RuntimeError(f"Could not write output image: {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
