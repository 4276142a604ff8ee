APP_NAME = "Typesprint"
APP_DIR_NAME = "typesprint"  # namespace under the per-user config location
LOG_FILENAME = "log.csv"
APP_LOG_FILENAME = "app.log"

# Session timing
TICK_RATE_MS = 100  # one countdown step per tick
CHARS_PER_WORD = 5.0

# Prompt defaults
DEFAULT_NUMBER_OF_WORDS = 15
WORDS_PER_SECOND_BUDGET = 4  # generated words per second of a timed session

CSV_HEADER = (
    "date",
    "num_words",
    "num_secs",
    "elapsed_secs",
    "wpm",
    "accuracy",
    "std_dev",
)
