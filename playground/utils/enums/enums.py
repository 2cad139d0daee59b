from __future__ import annotations
from enum import Enum


# 좌/우 (팔 분류 등)
class SideEnum(str, Enum):
    right = "right"
    left = "left"


# ── Body-part states ─────────────────────────────────────
class TorsoState(str, Enum):
    upright = "upright"
    prone = "prone"
    supine = "supine"


class ArmState(str, Enum):
    down = "down"
    out = "out"
    up = "up"
    supporting = "supporting"


class LegState(str, Enum):
    straight = "straight"


class YogaPose(str, Enum):
    mountain = "mountain"
    volcano = "volcano"
    tpose = "tpose"
    plank = "plank"
    shavasana = "shavasana"


# ── Head / rhythm ────────────────────────────────────────
class HeadDirection(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"


# center = 쉬는 박자 (고개 동작 불필요)
class ArrowDirection(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    center = "center"


# ── Sessions ─────────────────────────────────────────────
class MindfulnessPhase(str, Enum):
    waiting = "waiting"
    active = "active"
    complete = "complete"


class InterruptionPolicy(str, Enum):
    decay = "decay"  # 움직임 비례 감쇠 (기본)
    reset = "reset"  # 엄격 모드: 중단 시 0으로 리셋 + waiting 복귀


class LightPhase(str, Enum):
    green = "green"
    countdown = "countdown"
    red = "red"


class ExperimentKind(str, Enum):
    mindfulness = "mindfulness"
    rhythm = "rhythm"
    yoga = "yoga"
    posture = "posture"
    red_light = "red_light"
    head_cursor = "head_cursor"
    face_chomp = "face_chomp"
    body_creature = "body_creature"
