# --- Параметри лабіринту ---
MAZE_SIZE = 21  # непарне число >= 5
MAZE_SEED = None  # None - випадковий лабіринт
HALFWAY_MOVE_THRESHOLD = None  # None - MAZE_SIZE * MAZE_SIZE // 2

# --- Параметри епізоду ---
TIME_LIMIT_SECONDS = 60
MAX_AGENT_ATTEMPTS = 2000  # для симуляції агентом

# --- Параметри підрахунку балів ---
TIME_BONUS_PER_SECOND = 10
EFFICIENCY_BONUS = 500
ACCURACY_BONUS = 300
MIN_MAZE_SCORE = 100

# --- Серія ігор ---
GAME_ORDER = ["stroop", "hanoi", "pattern", "maze", "memory", "word"]
