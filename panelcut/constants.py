"""Named defaults for documents and the path-data reader.

Lengths are in document units (the unit suffix on width/height, mm unless noted).
"""

# Document defaults
DEFAULT_UNIT = "mm"
DEFAULT_STROKE_COLOR = "black"
DEFAULT_STROKE_WIDTH = 1.0
DEFAULT_MARGIN = 5.0              # margin used by auto-resize on export
SIZE_DECIMALS = 2                 # width/height/viewBox size digits, e.g. "131.00mm"

# SVG namespace
SVG_NS = "http://www.w3.org/2000/svg"

# Path-data reader
READ_BUFFER_LENGTH = 32           # max digits in one numeric token
SEPARATORS = " ,"                 # separators between x and y
WHITESPACE = " ,\t\r\n"           # ends a number; skipped between commands
COMMANDS = "MLCZ"
MAX_SEPARATOR_RUN = 2             # extra separators tolerated between x and y
