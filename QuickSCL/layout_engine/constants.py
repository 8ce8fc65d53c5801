"""Layout engine constants and defaults."""

# Rank direction
RANKDIR_TB = "TB"
RANKDIR_BT = "BT"
RANKDIR_LR = "LR"
RANKDIR_RL = "RL"
RANKDIRS = (RANKDIR_TB, RANKDIR_BT, RANKDIR_LR, RANKDIR_RL)

# Spacing defaults
DEFAULT_RANKDIR = RANKDIR_TB
DEFAULT_NODESEP = 80
DEFAULT_RANKSEP = 80
DEFAULT_MARGINX = 50
DEFAULT_MARGINY = 50

# Crossing minimisation
ORDERING_SWEEPS = 4
