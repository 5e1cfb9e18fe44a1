"""
HandHero Live Demo - Main Entry Point.
======================================

Wires the per-frame engine to a webcam:
1. Perception: MediaPipe Hands on a threaded camera feed.
2. Evaluation: `evaluate` against the current session exercise.
3. Feedback: the debug HUD.

Usage:
    $ python -m handhero.main
"""
import threading
import time
from typing import Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np

from handhero.catalog import build_session
from handhero.config import CONFIG
from handhero.evaluator import evaluate
from handhero.ui.hud import HUD


class ThreadedCamera:
    """
    Non-blocking camera reader.

    cv2.VideoCapture.read() blocks; running it on a daemon thread means the
    main loop always evaluates the freshest frame instead of a stale buffer.
    """
    def __init__(self, src: int = 0):
        self.cap = cv2.VideoCapture(src)
        self.cap.set(cv2.CAP_PROP_FPS, CONFIG.get("TARGET_FPS", 30))

        self.ret, self.frame = self.cap.read()
        self.running = True
        self.lock = threading.Lock()

        threading.Thread(target=self._reader, daemon=True).start()

    def _reader(self):
        while self.running:
            ret, frame = self.cap.read()
            if not ret:
                self.running = False
                break
            with self.lock:
                self.ret, self.frame = ret, frame

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """Returns the most recent frame."""
        with self.lock:
            return self.ret, self.frame.copy() if self.frame is not None else None

    def release(self):
        self.running = False
        self.cap.release()


def main():
    # 1. Boot Sequence
    session = build_session(CONFIG["SESSION_SIZE"])
    current = 0
    print("🚀 HANDHERO: ONLINE")
    print(f"   -> Session: {', '.join(e.name for e in session)}")
    print("   -> Press 'ESC' to Exit")
    print("   -> Press 'N' for the Next Exercise")
    print("   -> Press 'D' to Toggle the Debug Overlay")

    hud = HUD()
    window_name = "HandHero"
    cv2.namedWindow(window_name)

    cam = ThreadedCamera(CONFIG["CAMERA_INDEX"])

    hands = mp.solutions.hands.Hands(
        max_num_hands=1,
        min_detection_confidence=CONFIG["MIN_DETECTION_CONFIDENCE"],
        min_tracking_confidence=CONFIG["MIN_TRACKING_CONFIDENCE"],
    )

    prev_time = 0
    show_overlay = CONFIG["DEBUG_OVERLAY"]

    try:
        while True:
            ret, frame = cam.read()
            if not ret or frame is None:
                if not cam.running: break
                continue

            if CONFIG["MIRROR_INPUT"]:
                frame = cv2.flip(frame, 1)
            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            results = hands.process(rgb)

            exercise = session[current]

            if results.multi_hand_landmarks:
                lms = results.multi_hand_landmarks[0]
                result = evaluate(lms, exercise)

                if show_overlay:
                    hud.render(frame, lms, exercise, result)

            curr = time.time()
            fps = 1/(curr-prev_time) if (curr-prev_time) > 0 else 0
            prev_time = curr
            hud.draw_fps(frame, fps)

            cv2.imshow(window_name, frame)

            k = cv2.waitKey(1)
            if k == 27: break  # ESC
            elif k == ord('n'):
                current = (current + 1) % len(session)
                print(f"➡️ NEXT: {session[current].icon} {session[current].name} - {session[current].description}")
            elif k == ord('d'): show_overlay = not show_overlay

    finally:
        cam.release()
        hands.close()
        cv2.destroyAllWindows()
        print("🔴 HANDHERO OFFLINE")


if __name__ == "__main__":
    main()
