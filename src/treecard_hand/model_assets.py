from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.request
from typing import List, Optional, Sequence


logger = logging.getLogger(__name__)

DEFAULT_MODEL_PATH = "models/hand_landmarker.task"

HAND_LANDMARKER_TASK_URLS = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task",
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task",
)


def _is_url(candidate: str) -> bool:
    return candidate.startswith(("http://", "https://"))


def _remove_partial(path: str) -> None:
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError:
        pass


def _ssl_context() -> ssl.SSLContext:
    # Some macOS Python builds (notably from python.org) ship without root certificates,
    # resulting in CERTIFICATE_VERIFY_FAILED. Prefer certifi when it is installed.
    try:
        import certifi  # type: ignore

        return ssl.create_default_context(cafile=certifi.where())
    except ImportError:
        return ssl.create_default_context()


def download_model(url: str, model_path: str, timeout_s: float) -> str:
    """
    Download `url` to `model_path`, first with urllib, then with curl.

    Raises RuntimeError when both fail; partial files are removed.
    """

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)

    try:
        with urllib.request.urlopen(url, context=_ssl_context(), timeout=timeout_s) as r, open(model_path, "wb") as f:
            f.write(r.read())
        return model_path
    except Exception as e:
        _remove_partial(model_path)
        python_error = e

    # curl often succeeds even when Python's SSL cert store is misconfigured.
    try:
        proc = subprocess.run(
            ["curl", "-L", "--fail", "--max-time", str(int(timeout_s)), "-o", model_path, url],
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        _remove_partial(model_path)
        raise RuntimeError(f"Download failed ({python_error}); curl unavailable ({e})") from python_error

    if proc.returncode == 0 and os.path.exists(model_path) and os.path.getsize(model_path) > 0:
        return model_path

    _remove_partial(model_path)
    raise RuntimeError(f"Download failed ({python_error}); curl stderr: {proc.stderr.strip()}") from python_error


def resolve_model_asset(
    model_path: str = DEFAULT_MODEL_PATH,
    candidates: Optional[Sequence[str]] = None,
    *,
    timeout_s: float = 30,
) -> str:
    """
    Return a local path to `hand_landmarker.task`.

    `candidates` are tried in order: local paths are used if they exist, URLs
    are downloaded to `model_path` with a per-candidate timeout. By default the
    target path itself is tried first, then the official MediaPipe model bucket.
    """

    if candidates is None:
        candidates = (model_path,) + HAND_LANDMARKER_TASK_URLS

    failures: List[str] = []
    for candidate in candidates:
        if not _is_url(candidate):
            if os.path.exists(candidate):
                return candidate
            failures.append(f"{candidate}: not found")
            continue

        try:
            path = download_model(candidate, model_path, timeout_s)
        except RuntimeError as e:
            logger.warning("Model source %s failed: %s", candidate, e)
            failures.append(f"{candidate}: {e}")
            continue
        logger.info("Downloaded hand landmarker model from %s", candidate)
        return path

    raise RuntimeError(
        "Missing MediaPipe Tasks model file and every candidate source failed.\n\n"
        f"Expected model at: {model_path}\n"
        "Tried:\n"
        + "".join(f"  - {f}\n" for f in failures)
        + "\nDownload manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{HAND_LANDMARKER_TASK_URLS[0]}"\n'
    )
