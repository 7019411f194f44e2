# --- Display ---
WIDTH = 800
HEIGHT = 400
FPS = 60

# --- World / Clock ---
TRACK_WIDTH = WIDTH         # spawn edge (px); obstacles enter here
GROUND_Y = 310              # y line the wheels and obstacles rest on
MAX_TICK_MS = 100.0         # clamp stalls (a frame never advances more than this)
DIFFICULTY_STEP_PX = 5000.0 # every 5000 px of distance ...
DIFFICULTY_STEP = 0.2       # ... difficulty rises by 0.2
DISTANCE_SCORE_DIV = 10     # base score floor = distance // 10

# --- Vehicle ---
VEHICLE_X = 100
VEHICLE_W = 80
VEHICLE_H = 50
MAX_SPEED = 15.0
TURBO_SPEED_FACTOR = 1.5    # turbo may push speed up to MAX_SPEED * 1.5
ACCELERATION = 0.3          # px/tick^2
DECELERATION = 0.15         # passive roll-off
GRAVITY = 0.6               # px/tick^2, applied only while airborne
JUMP_FORCE = -12.0
SUSPENSION_LANDING = 5.0
SUSPENSION_RECOVERY = 0.5
WHEEL_SPIN = 0.2            # wheel phase += speed * WHEEL_SPIN
TURBO_MASTER_MS = 2000.0    # hold longer than this -> turboMastered

# --- Track generation ---
BASE_SPAWN_INTERVAL_MS = 800.0
OBSTACLE_SPAWN_P = 0.05     # * speed_factor * difficulty
RAMP_SPAWN_P = 0.02         # * speed_factor
RAMP_SPACING_MULT = 1.5
PATTERN_SPAWN_P = 0.1
PATTERN_SPACING_MULT = 3.0
PATTERN_MIN_DIFFICULTY = 1.5
CLEARANCE_OBSTACLE_PX = 150 # nothing may sit within this of the spawn edge
CLEARANCE_RAMP_PX = 200
CLEARANCE_PATTERN_PX = 300
SEED_DEFAULT = 12345

# --- Collision ---
HITBOX_MARGIN_X = 10
CROUCH_HEIGHT_FACTOR = 0.7
RAMP_TOLERANCE_PX = 10.0
FRONT_WHEEL_FRAC = 0.7
REAR_WHEEL_FRAC = 0.3

# --- Combo ---
COMBO_TIMEOUT_MS = 3000.0
HISTORY_CAPACITY = 10
POINTS_JUMP_LAND = 15
POINTS_DODGE = 20
POINTS_RAMP_JUMP = 30
POINTS_TURBO_MASTER = 25
SPEED_DEMON_MIN_SPEED = 12.0
PERFECT_LANDING_WINDOW_MS = 5000.0
SPEED_DEMON_WINDOW_MS = 10000.0
AIR_MASTER_WINDOW_MS = 15000.0
SLALOM_WINDOW_MS = 8000.0
SLALOM_MIN_KINDS = 4

# --- Colors (RGB) ---
COLOR_SKY = (135, 190, 235)
COLOR_GROUND = (150, 110, 70)
COLOR_FG = (20, 24, 32)
COLOR_BIKE = (220, 40, 40)
COLOR_BIKE_TURBO = (255, 150, 30)
COLOR_OBSTACLE = (90, 80, 70)
COLOR_RAMP = (210, 170, 90)
COLOR_DANGER = (255, 86, 110)
