# MediaPipe Pose landmark indices (33 points)
NOSE                     = 0
L_EYE,      R_EYE        = 2, 5
L_MOUTH,    R_MOUTH      = 9, 10
L_SHOULDER, R_SHOULDER   = 11, 12
L_ELBOW,    R_ELBOW      = 13, 14
L_WRIST,    R_WRIST      = 15, 16
L_HIP,      R_HIP        = 23, 24
L_KNEE,     R_KNEE       = 25, 26
L_ANKLE,    R_ANKLE      = 27, 28

POSE_LANDMARK_COUNT = 33

# Face mesh landmark indices
FACE_NOSE_TIP = 1

# Triplets for joint angles (A, vertex, C)
LEFT_SHOULDER_ANGLE  = (L_ELBOW, L_SHOULDER, L_HIP)
RIGHT_SHOULDER_ANGLE = (R_ELBOW, R_SHOULDER, R_HIP)

LEFT_ARM  = (L_SHOULDER, L_ELBOW, L_WRIST)
RIGHT_ARM = (R_SHOULDER, R_ELBOW, R_WRIST)

LEFT_LEG  = (L_HIP, L_KNEE, L_ANKLE)
RIGHT_LEG = (R_HIP, R_KNEE, R_ANKLE)

LEFT_HIP_ANGLE  = (L_SHOULDER, L_HIP, L_KNEE)
RIGHT_HIP_ANGLE = (R_SHOULDER, R_HIP, R_KNEE)

# calc_accuracy 비교 대상 트리플릿 (이름 → 인덱스)
ACCURACY_TRIPLETS = {
    "l_shoulder": LEFT_SHOULDER_ANGLE,
    "r_shoulder": RIGHT_SHOULDER_ANGLE,
    "l_elbow": LEFT_ARM,
    "r_elbow": RIGHT_ARM,
    "l_hip": LEFT_HIP_ANGLE,
    "r_hip": RIGHT_HIP_ANGLE,
    "l_knee": LEFT_LEG,
    "r_knee": RIGHT_LEG,
}
