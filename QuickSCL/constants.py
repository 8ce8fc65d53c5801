"""Sizing constants and DSL keywords for SCL compilation."""

# Step sizing
STEP_WIDTH = 180
STEP_BASE_HEIGHT = 80
ACTION_HEIGHT_INCREMENT = 24

# Transition sizing (rendered bar)
TRANSITION_WIDTH = 90
TRANSITION_HEIGHT = 60

# Transition layout reservation
TRANSITION_MIN_LAYOUT_WIDTH = 300
CONDITION_CHAR_WIDTH = 10

# Node kinds (serialized as node "type")
NODE_KIND_STEP = "step"
NODE_KIND_TRANSITION = "transition"

# Edge kinds
EDGE_KIND_SEQUENTIAL = "sequential"
EDGE_KIND_JUMP = "jump"

# Edge style payload
EDGE_TYPE = "draggable"
EDGE_STROKE = "#fff"
JUMP_DASH_ARRAY = "5,5"
EDGE_MARKER = "arrowclosed"

# DSL keywords (matched case-insensitively, followed by a space)
KEYWORD_STEP = "STEP"
KEYWORD_TRANSITION = "TRANSITION"
KEYWORD_ACTION = "ACTION"
KEYWORD_CONDITION = "CONDITION"
KEYWORD_JUMP = "JUMP"
KEYWORD_CONNECT = "CONNECT"
KEYWORD_FROM = "FROM"
