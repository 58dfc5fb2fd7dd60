# --- Display ---
WIDTH = 450
HEIGHT = 600
TICK_MS = 20                # one update every 20 ms (50 ticks/s)
TICK_S = TICK_MS / 1000.0

# --- Character / Physics ---
CHARACTER_X = WIDTH / 3     # fixed x, the world scrolls left
CHARACTER_W = 50
CHARACTER_H = 36
GRAVITY = 1.0               # velocity lost per tick
LIFT_VELOCITY = 17.0        # upward velocity set on each flap
VELOCITY_SCALE = 0.5        # y moves by velocity * scale per tick
CHARACTER_Y = HEIGHT / 2 - LIFT_VELOCITY

# --- Pipes ---
PIPE_WIDTH = 100
PIPE_SPEED = 3
PIPE_MIN_HEIGHT = 50        # shortest top pipe
PIPE_MIN_SPACE = 130        # smallest vertical gap between the two pieces
SPAWN_PERIOD = 110          # frames between two pipe spawns

# --- Ground ---
GROUND_BAND = 20            # bottom strip reserved for the ground
GROUND_SPEED = 3            # matches PIPE_SPEED
GROUND_TILE_SCALE = 0.5     # ground tiles are drawn at half their source size
GROUND_TILE_SRC_W = 336     # source width of the ground sprite
GROUND_TILE_WIDTH = GROUND_TILE_SRC_W * GROUND_TILE_SCALE

# --- Seeds ---
SEED_DEFAULT = 12345

# --- Assets ---
ASSET_IDS = ("background", "bird", "ground", "pipe", "pipe-rev")
ASSET_DIR_DEFAULT = "images"
ASSET_EXT = ".png"

# Sub-rectangles (x, y, w, h) inside the classic 1024x1024 flappy atlas
SPRITE_SHEET_RECTS = {
    "background": (0, 0, 288, 512),
    "ground":     (584, 0, 336, 112),
    "bird":       (0, 970, 48, 48),
    "pipe":       (168, 646, 52, 320),
    "pipe-rev":   (112, 646, 52, 320),
}

# Sizes (w, h) of the solid placeholder sprites
PLACEHOLDER_SIZES = {
    "background": (WIDTH, HEIGHT),
    "bird":       (CHARACTER_W, CHARACTER_H),
    "ground":     (GROUND_TILE_SRC_W, 112),
    "pipe":       (52, 320),
    "pipe-rev":   (52, 320),
}

# --- Colors (RGB) ---
COLOR_SKY = (78, 192, 202)
COLOR_BIRD = (250, 204, 44)
COLOR_GROUND = (222, 216, 149)
COLOR_PIPE = (115, 191, 46)
COLOR_PIPE_REV = (98, 168, 38)
COLOR_FG = (255, 255, 255)
COLOR_PANEL = (40, 60, 90)
COLOR_DANGER = (255, 86, 110)

PLACEHOLDER_COLORS = {
    "background": COLOR_SKY,
    "bird":       COLOR_BIRD,
    "ground":     COLOR_GROUND,
    "pipe":       COLOR_PIPE,
    "pipe-rev":   COLOR_PIPE_REV,
}

# --- Agent environment ---
SCORE_REWARD = 5.0          # bonus per pipe passed
DEATH_MESSAGE = "you died."
