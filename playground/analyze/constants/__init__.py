# re-exports: 다른 모듈에서 짧게 import 하도록

from .landmark_indices import (
    NOSE, L_EYE, R_EYE, L_MOUTH, R_MOUTH,
    L_SHOULDER, R_SHOULDER, L_ELBOW, R_ELBOW, L_WRIST, R_WRIST,
    L_HIP, R_HIP, L_KNEE, R_KNEE, L_ANKLE, R_ANKLE,
    POSE_LANDMARK_COUNT, FACE_NOSE_TIP,
    LEFT_SHOULDER_ANGLE, RIGHT_SHOULDER_ANGLE,
    LEFT_ARM, RIGHT_ARM, LEFT_LEG, RIGHT_LEG,
    LEFT_HIP_ANGLE, RIGHT_HIP_ANGLE, ACCURACY_TRIPLETS,
)

from .model_params import (
    DEGENERATE_EPS,
    TORSO_UPRIGHT_MAX_DEG,
    ARM_DOWN_MAX_DEG,
    ARM_OUT_MIN_DEG,
    ARM_OUT_MAX_DEG,
    ARM_UP_MIN_DEG,
    ARM_SUPPORT_ELBOW_MIN_DEG,
    ARM_SUPPORT_SHOULDER_MIN_DEG,
    LEGS_STRAIGHT_MIN_DEG,
    ACCURACY_MAX_DIFF_DEG,
    HEAD_PITCH_THRESHOLD,
    HEAD_YAW_THRESHOLD,
    EYES_CLOSED_THRESHOLD,
    BLINK_LEFT,
    BLINK_RIGHT,
    JAW_OPEN,
    BODY_SMOOTH,
    PUPIL_STIFFNESS,
    PUPIL_DAMPING,
    EYE_RADIUS,
    SPARK_GRAVITY,
    GAME_WIDTH,
    GAME_HEIGHT,
)
