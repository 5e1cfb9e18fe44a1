"""
HandHero Types.
Central definition of Data Contracts to prevent circular imports.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# --- ZONE TYPES ---
class Zone(Enum):
    GREEN = "GREEN"
    BLUE = "BLUE"
    YELLOW = "YELLOW"
    RED = "RED"

    @property
    def rank(self) -> int:
        """Higher is better. GREEN=3 ... RED=0."""
        return _ZONE_RANK[self]

    @classmethod
    def from_score(cls, score: float, cuts: Tuple[float, float, float]) -> "Zone":
        """Maps a score onto a 4-tier scale given (green, blue, yellow) floors."""
        green, blue, yellow = cuts
        if score >= green:
            return cls.GREEN
        if score >= blue:
            return cls.BLUE
        if score >= yellow:
            return cls.YELLOW
        return cls.RED


_ZONE_RANK = {Zone.RED: 0, Zone.YELLOW: 1, Zone.BLUE: 2, Zone.GREEN: 3}


class BoundaryLevel(Enum):
    GREEN = "GREEN"
    ACCEPTABLE = "ACCEPTABLE"
    LOW = "LOW"


class Severity(Enum):
    NONE = "none"
    MAJOR = "major"


class ExerciseType(Enum):
    ISOLATION = "isolation"
    PINCH = "pinch"
    SPREAD = "spread"
    FIST = "fist"
    FLAT = "flat"

    @classmethod
    def from_label(cls, raw_label: Any) -> Optional["ExerciseType"]:
        """Returns None for anything that is not a known exercise type."""
        if isinstance(raw_label, cls):
            return raw_label
        if not isinstance(raw_label, str):
            return None
        clean = raw_label.strip().lower()
        for member in cls:
            if member.value == clean:
                return member
        return None


# --- GEOMETRY TYPES ---
@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass(frozen=True)
class Landmark:
    """Mimics mediapipe NormalizedLandmark. z may be 0 when depth is unavailable."""
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class HandFrame:
    wrist: Landmark
    hand_length: float
    hand_width: float
    palm_center: Point2D


@dataclass(frozen=True)
class BoundaryLine:
    start: Point2D
    end: Point2D
    level: BoundaryLevel
    reference_node: Optional[int] = None


@dataclass(frozen=True)
class Boundaries:
    green: BoundaryLine
    acceptable: BoundaryLine
    low: BoundaryLine

    def __iter__(self):
        return iter((self.green, self.acceptable, self.low))


# --- EXERCISE TYPES ---
@dataclass(frozen=True)
class ExerciseDescriptor:
    type: str
    target_fingers: Tuple[int, ...] = ()
    pinch_pair: Optional[Tuple[int, int]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExerciseDescriptor":
        targets = data.get("targetFingers", data.get("target_fingers"))
        pair = data.get("pinchPair", data.get("pinch_pair"))
        return cls(
            type=data.get("type"),
            target_fingers=tuple(targets) if targets is not None else (),
            pinch_pair=tuple(pair) if pair is not None else None,
        )


# --- RESULT TYPES ---
@dataclass(frozen=True)
class FingerResult:
    finger_index: int
    finger: str
    zone: Zone
    score: float
    is_target: bool
    extended: bool = False
    curled: bool = False
    passed: bool = True
    violation: bool = False
    severity: Severity = Severity.NONE
    in_safe_zone: bool = True
    ignored: bool = False
    detail: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fingerIndex": self.finger_index,
            "finger": self.finger,
            "zone": self.zone.value,
            "score": self.score,
            "isTarget": self.is_target,
            "extended": self.extended,
            "curled": self.curled,
            "pass": self.passed,
            "violation": self.violation,
            "severity": self.severity.value,
            "inSafeZone": self.in_safe_zone,
            "ignored": self.ignored,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class Violation:
    finger_index: int
    finger: str
    severity: Severity


@dataclass(frozen=True)
class EvaluationResult:
    zone: Zone
    score: float
    passed: bool
    exercise_type: Optional[ExerciseType] = None
    fingers: Tuple[FingerResult, ...] = ()
    violations: Tuple[Violation, ...] = ()
    metrics: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    error_code: Optional[str] = None

    # Aliases used by the isolation family and the debug overlay
    @property
    def overall_zone(self) -> Zone:
        return self.zone

    @property
    def overall_score(self) -> float:
        return self.score

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def targets(self) -> Tuple[FingerResult, ...]:
        return tuple(f for f in self.fingers if f.is_target and f.finger_index != 0)

    @property
    def non_targets(self) -> Tuple[FingerResult, ...]:
        return tuple(f for f in self.fingers if not f.is_target and f.finger_index != 0)

    @property
    def thumb(self) -> Optional[FingerResult]:
        for f in self.fingers:
            if f.finger_index == 0:
                return f
        return None

    def finger(self, finger_index: int) -> Optional[FingerResult]:
        for f in self.fingers:
            if f.finger_index == finger_index:
                return f
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-friendly dict."""
        if self.is_error:
            return {
                "error": self.error,
                "errorCode": self.error_code,
                "passed": False,
                "score": 0.0,
                "zone": Zone.RED.value,
            }
        return {
            "type": self.exercise_type.value if self.exercise_type else None,
            "zone": self.zone.value,
            "overallZone": self.zone.value,
            "score": self.score,
            "overallScore": self.score,
            "passed": self.passed,
            "fingerResults": [f.to_dict() for f in self.fingers],
            "violations": [
                {"finger": v.finger, "fingerIndex": v.finger_index, "severity": v.severity.value}
                for v in self.violations
            ],
            "metrics": dict(self.metrics),
        }
