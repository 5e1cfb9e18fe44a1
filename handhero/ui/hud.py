"""
HandHero HUD (Debug Overlay).
Visualizes the Boundary Engine: the invisible fences, the per-finger zones and the verdict.
Reads engine output only; nothing here feeds back into scoring.
"""

import cv2
import numpy as np
import mediapipe as mp

from handhero.config import ALL_TIPS
from handhero.core.boundaries import y_on_line
from handhero.core.types import Zone
from handhero.evaluator import debug_get_boundaries
from handhero.hand_utils import to_coords


class HUD:
    def __init__(self):
        self.connections = mp.solutions.hands.HAND_CONNECTIONS

        # --- THEME COLORS (BGR) ---
        self.C_GREEN  = (0, 255, 0)
        self.C_BLUE   = (255, 191, 0)
        self.C_YELLOW = (0, 215, 255)
        self.C_RED    = (68, 68, 255)
        self.C_WHITE  = (255, 255, 255)
        self.C_DARK   = (20, 20, 20)

        self.zone_colors = {
            Zone.GREEN: self.C_GREEN,
            Zone.BLUE: self.C_BLUE,
            Zone.YELLOW: self.C_YELLOW,
            Zone.RED: self.C_RED,
        }

        # Shaded bands above each fence: (color, alpha), drawn bottom-up
        self.band_styles = {
            "low": ((7, 193, 255), 0.25),
            "acceptable": ((243, 150, 33), 0.30),
            "green": ((80, 175, 76), 0.35),
        }

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.6):
        """Draws a semi-transparent 'Glass' background."""
        if y+h > img.shape[0] or x+w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        tint = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, tint, alpha, 1.0)
        cv2.rectangle(img, (x, y), (x+w, y+h), color, 1)

    def _line_endpoints(self, line, w, h):
        """The boundary extended across the whole frame, in pixels."""
        y_left = y_on_line(0.0, line)
        y_right = y_on_line(1.0, line)
        return (0, int(y_left * h)), (w, int(y_right * h))

    def _draw_zones(self, frame, boundaries):
        h, w, _ = frame.shape
        for name in ("low", "acceptable", "green"):
            line = getattr(boundaries, name)
            color, alpha = self.band_styles[name]
            (x1, y1), (x2, y2) = self._line_endpoints(line, w, h)

            # Polygon from the fence up to the top edge
            overlay = frame.copy()
            pts = np.array([[x1, y1], [x2, y2], [x2, 0], [x1, 0]], dtype=np.int32)
            cv2.fillPoly(overlay, [pts], color)
            cv2.addWeighted(overlay, alpha, frame, 1 - alpha, 0, dst=frame)

            cv2.line(frame, (x1, y1), (x2, y2), color, 2)

    def _draw_skeleton(self, frame, coords, result):
        h, w, _ = frame.shape
        pts = [(int(x * w), int(y * h)) for x, y, _ in coords]

        for a, b in self.connections:
            cv2.line(frame, pts[a], pts[b], self.C_DARK, 4)
            cv2.line(frame, pts[a], pts[b], self.C_WHITE, 1)

        for node, p in enumerate(pts):
            color = self.C_WHITE
            if node > 0 and result is not None:
                finger = result.finger((node - 1) // 4)
                if finger is not None:
                    color = self.C_RED if finger.violation else self.zone_colors[finger.zone]
            radius = 6 if node in (4, 8, 12, 16, 20) else 4
            cv2.circle(frame, p, radius, color, -1)
            cv2.circle(frame, p, radius, self.C_DARK, 1)

    def render(self, frame, landmarks, exercise, result):
        h, w, _ = frame.shape
        coords = to_coords(landmarks)

        # 1. ZONES + FENCES (isolation and pinch only; full-hand exercises have no targets)
        targets = getattr(exercise, "target_fingers", ())
        exercise_type = getattr(exercise, "type", None)
        if exercise_type == "pinch" and exercise.pinch_pair:
            targets = [ALL_TIPS.index(node) for node in exercise.pinch_pair]
        if exercise_type in ("isolation", "pinch"):
            self._draw_zones(frame, debug_get_boundaries(coords, targets))

        # 2. SKELETON
        self._draw_skeleton(frame, coords, result)

        if result is None:
            return
        ui_color = self.zone_colors[result.zone]

        # 3. SCORE BAR
        bar_w, bar_h = 200, 10
        bar_x, bar_y = (w - bar_w) // 2, h - 40
        self._draw_glass_panel(frame, bar_x, bar_y, bar_w, bar_h, self.C_DARK, 0.8)
        fill_w = int(bar_w * max(0.0, min(1.0, result.score)))
        cv2.rectangle(frame, (bar_x, bar_y), (bar_x + fill_w, bar_y + bar_h), ui_color, -1)

        # 4. STATUS PANEL
        self._draw_glass_panel(frame, 20, 20, 400, 70, self.C_DARK, 0.4)
        name = getattr(exercise, "name", exercise_type or "?")
        cv2.putText(frame, str(name), (35, 50), cv2.FONT_HERSHEY_SIMPLEX, 0.7, self.C_WHITE, 2)

        if result.is_error:
            status = f"ERROR // {result.error_code}"
        else:
            verdict = "PASS" if result.passed else "HOLD"
            status = f"{result.zone.value} {result.score:.2f} // {verdict}"
        cv2.putText(frame, status, (35, 78), cv2.FONT_HERSHEY_PLAIN, 1.2, ui_color, 1)

        if result.violations:
            names = ", ".join(v.finger for v in result.violations)
            cv2.putText(frame, f"VIOLATION: {names}", (w//2 - 150, 40),
                        cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_RED, 1)

    def draw_fps(self, frame, fps):
        cv2.putText(frame, f"{int(fps)} FPS", (frame.shape[1]-100, 40),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_GREEN, 1)
