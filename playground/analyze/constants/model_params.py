# 분류 임계값 (경험적으로 튜닝된 고정값, fixtures로 재검증할 것)

# angle_at 퇴화 가드: 벡터 길이가 이보다 작으면 0 rad 반환
DEGENERATE_EPS = 1e-9

# Torso: 척추(엉덩이중점→어깨중점)와 수직축 사이 각도
TORSO_UPRIGHT_MAX_DEG = 45.0

# Arm: 어깨각(팔꿈치-어깨-엉덩이) 구간. 구간 사이의 틈(45~55, 125~135)은 미분류(None)
ARM_DOWN_MAX_DEG = 45.0
ARM_OUT_MIN_DEG = 55.0
ARM_OUT_MAX_DEG = 125.0
ARM_UP_MIN_DEG = 135.0

# Arm: 누운 자세에서 몸을 받치는 팔 (팔꿈치 펴짐 + 어깨각 벌어짐)
ARM_SUPPORT_ELBOW_MIN_DEG = 120.0
ARM_SUPPORT_SHOULDER_MIN_DEG = 40.0

# Legs: 양 무릎각 평균
LEGS_STRAIGHT_MIN_DEG = 140.0

# calc_accuracy: 이 이상 차이나면 해당 관절 점수 0
ACCURACY_MAX_DIFF_DEG = 90.0

# Head direction (rad)
HEAD_PITCH_THRESHOLD = 0.25
HEAD_YAW_THRESHOLD = 0.20

# Blendshapes
EYES_CLOSED_THRESHOLD = 0.5
BLINK_LEFT = "eyeBlinkLeft"
BLINK_RIGHT = "eyeBlinkRight"
JAW_OPEN = "jawOpen"

# Smoothing / physics
BODY_SMOOTH = 0.5
PUPIL_STIFFNESS = 120.0
PUPIL_DAMPING = 8.0
EYE_RADIUS = 0.35
SPARK_GRAVITY = 3.0

# 게임 좌표계 (16:9 캔버스 단위)
GAME_WIDTH = 16.0
GAME_HEIGHT = 9.0
