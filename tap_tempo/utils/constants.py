"""
Constants used across the tap tempo package.
"""

# Defaults for the estimator and the text output
DEFAULT_SAMPLE_SIZE = 5
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_PRECISION = 0
DEFAULT_DISPLAY = "text"

# Environment variable naming a JSON configuration file
CONFIG_ENV_VAR = "TAP_TEMPO_CONFIG"

INSTRUCTIONS = "Tap any key to measure tempo. Press 'Esc' to exit."

# Bar graph layout
BAR_WIDTH = 3
BAR_GAP = 1
# Lowest top of the vertical axis, so small fluctuations stay visible
MIN_BAR_SCALE = 120

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
