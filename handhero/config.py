"""
HandHero Configuration Management.
==================================

This module defines the threshold space for the HandHero boundary engine.
The parameters are organized into a "Layer Cake" model that mirrors the
evaluation pipeline: Frame -> Boundaries -> Classifiers -> Strategies.

! WARNING !
The classifier and strategy thresholds are tuned together. Each exercise
family keeps its own zone scale on purpose (isolation uses 0.40 as the
YELLOW floor, spread/flat use 0.45, fist uses 0.80/0.60/0.45).
"""

import os

# --- FINGER / NODE DEFINITIONS ---
# MediaPipe Hand Landmarks. Finger index -> joint node indices.
# The thumb's "mcp" slot is its CMC (node 1).
FINGER_NAMES = ["thumb", "index", "middle", "ring", "pinky"]

FINGER_NODES = {
    0: {"mcp": 1, "pip": 2, "dip": 3, "tip": 4},
    1: {"mcp": 5, "pip": 6, "dip": 7, "tip": 8},
    2: {"mcp": 9, "pip": 10, "dip": 11, "tip": 12},
    3: {"mcp": 13, "pip": 14, "dip": 15, "tip": 16},
    4: {"mcp": 17, "pip": 18, "dip": 19, "tip": 20},
}

ALL_TIPS = [4, 8, 12, 16, 20]
ALL_DIPS = [3, 7, 11, 15, 19]
ALL_PIPS = [2, 6, 10, 14, 18]
ALL_MCPS = [1, 5, 9, 13, 17]

NUM_LANDMARKS = 21

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: HAND FRAME (The Ruler)
    # =========================================================
    "MIN_FRAME_EXTENT": 1e-6,        # Clamp for degenerate hand length/width
    "VERTICAL_LINE_EPS": 1e-4,       # |dx| below this = treat line as constant-y

    # =========================================================
    # LAYER 2: BOUNDARIES (The Fence)
    # =========================================================
    "BOUNDARY_EXTENT": 1.5,          # Single-target lines reach +/- 1.5x hand width
    "FALLBACK_FINGER": 2,            # Middle finger when no usable targets

    # =========================================================
    # LAYER 3: TARGET FINGER (Extension Check)
    # =========================================================
    # extension = (MCP.y - TIP.y) / hand length, ratio = tip/mcp reach from wrist
    "TARGET_GREEN_EXTENSION": 0.15,
    "TARGET_GREEN_RATIO": 1.3,
    "TARGET_GREEN_BASE": 0.85,       # GREEN score = min(1, base + extension)
    "TARGET_BLUE_EXTENSION": 0.08,
    "TARGET_BLUE_RATIO": 1.15,
    "TARGET_BLUE_SCORE": 0.75,
    "TARGET_YELLOW_EXTENSION": 0.02,
    "TARGET_YELLOW_RATIO": 1.0,
    "TARGET_YELLOW_SCORE": 0.55,
    "TARGET_MINIMAL_EXTENSION": -0.05,
    "TARGET_MINIMAL_SCORE": 0.40,
    "TARGET_RED_SCORE": 0.20,

    # =========================================================
    # LAYER 4: NON-TARGET FINGER (Violation Check)
    # =========================================================
    "NON_TARGET_VIOLATION_SCORE": 0.3,
    "NON_TARGET_RAISED_SCORE": 0.7,
    "NON_TARGET_SAFE_SCORE": 1.0,

    # =========================================================
    # LAYER 5: THUMB (Maximum Leniency)
    # =========================================================
    # ratio = tip/MCP reach from wrist, away = tip to palm center / hand width
    "THUMB_GREEN_RATIO": 1.4,
    "THUMB_GREEN_AWAY": 0.4,
    "THUMB_BLUE_RATIO": 1.2,
    "THUMB_BLUE_AWAY": 0.3,
    "THUMB_BLUE_SCORE": 0.75,
    "THUMB_YELLOW_RATIO": 1.0,
    "THUMB_YELLOW_SCORE": 0.50,
    "THUMB_RED_SCORE": 0.25,
    "THUMB_LATERAL_LIMIT": 0.3,      # x past index MCP, fraction of hand width
    "THUMB_REACH_LIMIT": 0.6,        # tip-to-wrist, fraction of hand length
    "THUMB_INTERFERENCE_SCORE": 0.8,

    # =========================================================
    # LAYER 6: EXERCISE STRATEGIES (The Referee)
    # =========================================================
    # --- ISOLATION ---
    "ISOLATION_ZONES": (0.85, 0.65, 0.40),
    "ISOLATION_MAJOR_PENALTY": 0.5,
    "ISOLATION_MINOR_PENALTY": 0.85,
    "ISOLATION_PASS_SCORE": 0.65,

    # --- PINCH ---
    # (upper bound on distance / hand width, zone, score). Last band catches all.
    "PINCH_BANDS": (
        (0.05, "GREEN", 1.0),
        (0.08, "GREEN", 0.90),
        (0.12, "BLUE", 0.75),
        (0.18, "YELLOW", 0.55),
        (0.28, "YELLOW", 0.40),
    ),
    "PINCH_FAIL": ("RED", 0.20),
    "PINCH_DEFAULT_PAIR": (4, 8),
    "PINCH_VIOLATION_PENALTY": 0.7,
    "PINCH_PASS_SCORE": 0.65,

    # --- SPREAD ---
    # (min gap / hand width, score). Below the last band scores the floor.
    "SPREAD_GAP_BANDS": ((0.30, 1.0), (0.20, 0.80), (0.12, 0.60), (0.06, 0.40)),
    "SPREAD_GAP_FLOOR": 0.20,
    "SPREAD_WEIGHTS": (0.5, 0.5),    # (extension, gap)
    "SPREAD_ZONES": (0.85, 0.65, 0.45),
    "SPREAD_PASS_SCORE": 0.65,

    # --- FLAT ---
    # (max gap / hand width, score). Smaller gaps score higher.
    "FLAT_GAP_BANDS": ((0.06, 1.0), (0.10, 0.80), (0.15, 0.60), (0.22, 0.40)),
    "FLAT_GAP_FLOOR": 0.20,
    "FLAT_WEIGHTS": (0.6, 0.4),      # (extension, togetherness)
    "FLAT_ZONES": (0.85, 0.65, 0.45),
    "FLAT_PASS_SCORE": 0.65,

    # --- FIST ---
    # (min curl, max ratio, zone, score)
    "FIST_TIERS": (
        (0.08, 0.9, "GREEN", 1.0),
        (0.02, 1.0, "BLUE", 0.75),
        (-0.05, 1.1, "YELLOW", 0.50),
    ),
    "FIST_RED_SCORE": 0.25,
    "FIST_ZONES": (0.80, 0.60, 0.45),
    "FIST_PASS_SCORE": 0.55,         # Lower bar than other exercises

    # =========================================================
    # LAYER 7: LIVE DEMO & DEBUG OVERLAY
    # =========================================================
    "CAMERA_INDEX": int(os.environ.get("HANDHERO_CAMERA_INDEX", 0)),
    "TARGET_FPS": 30,
    "MIRROR_INPUT": True,            # Flip frames for a mirror-like view
    "DEBUG_OVERLAY": os.environ.get("HANDHERO_DEBUG", "1") != "0",
    "MIN_DETECTION_CONFIDENCE": 0.5,
    "MIN_TRACKING_CONFIDENCE": 0.5,
    "SESSION_SIZE": 8,
}
