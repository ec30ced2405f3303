"""
Dice rolling constants.
All durations are in seconds.
"""

# Die faces
FACES_COUNT = 6
DEFAULT_FACE = 1

# Roll timing
DEFAULT_ROLL_TIME = 5.0
SAMPLE_INTERVAL = 0.25  # Time between two sampled faces

# Batch supervision
POLL_INTERVAL = 0.05  # Completion barrier poll period

# Double detection only applies to a pair of dice
DOUBLE_DICE_COUNT = 2
