"""Play-field dimensions and gameplay constants.

All values in canvas pixels and pixels per tick. One tick is one rendered
frame (60 per second in the pygame host).
"""

# Field
FIELD_WIDTH = 800
FIELD_HEIGHT = 400

# Paddles
PADDLE_WIDTH = 12
PADDLE_HEIGHT = 80
PADDLE_MARGIN = 20  # distance from the side wall to the paddle's outer face
PADDLE_SPEED = 6  # human input speed

# Ball
BALL_RADIUS = 8
BALL_SPEED_X = 4
BALL_SPEED_Y_MIN = 2  # serve vy is drawn from [MIN, MAX) with a random sign
BALL_SPEED_Y_MAX = 6

# Paddle hits: vy = normalised offset from paddle centre * DEFLECTION
DEFLECTION = 5

# Ball must be this far past a side edge before the goal counts
GOAL_MARGIN = 20

TARGET_SCORE = 5

# Opponent (reference difficulty)
AI_MAX_SPEED = 4  # strictly below PADDLE_SPEED
AI_REACTION_WINDOWS = 4
AI_BUCKET_SIZE = 10
AI_AIM_NOISE = 6  # +/- pixels
AI_GAIN = 0.2

AI_LABEL = "AI"
