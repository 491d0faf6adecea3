import string

# Symbols the player may be asked to press
ALPHABET            = tuple(string.ascii_uppercase + string.digits)

# Random delay before the target appears, [min, max) in ms
DELAY_MIN_MS        = 1000
DELAY_MAX_MS        = 3000

# Live display sampling
TICK_MS             = 10

# Ranking
RANKING_SIZE        = 5
PLAYER_ID_LENGTH    = 4
PROMPT_MAX_CHARS    = 16      # the prompt accepts more; ranking truncates

# Geometry / UI
BG_COLOR            = (250, 250, 250)
TEXT_COLOR          = (20, 20, 20)
TARGET_COLOR        = (40, 70, 230)
DONE_COLOR          = (30, 160, 60)
TIMER_RUNNING_COLOR = (210, 40, 40)
PROMPT_BG_COLOR     = (235, 235, 245)
BUTTON_COLOR        = (40, 40, 40)
CHECK_MARK          = "✓"

EDGE_MARGIN         = 20
INSTRUCTION_FONT    = 30
TARGET_FONT         = 110
TIMER_FONT          = 44
RESULT_FONT         = 26
RANKING_FONT        = 22

START_BUTTON_W      = 160
START_BUTTON_H      = 44
