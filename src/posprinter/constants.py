"""ESC/POS control bytes and command prefixes."""

NUL = 0x00
EOT = 0x04
LF = 0x0A
DLE = 0x10
CAN = 0x18
ESC = 0x1B
GS = 0x1D

# Hardware
HW_INIT = bytes([ESC, 0x40])
HW_RESET = bytes([ESC, 0x3F, LF, NUL])
CANCEL = bytes([CAN])

# Paper
PAPER_CUT_FULL = bytes([GS, 0x56, 0x41, 0x00])
PAPER_CUT_PARTIAL = bytes([GS, 0x56, 0x41, 0x01])

# Character tables
CHARACTER_PAGE_CODE = bytes([ESC, 0x74])
CHARACTER_SET = bytes([ESC, 0x52])

# Text style
TEXT_BOLD = bytes([ESC, 0x45])
TEXT_UNDERLINE = bytes([ESC, 0x2D])
TEXT_DOUBLE_STRIKE = bytes([ESC, 0x47])
TEXT_FONT = bytes([ESC, 0x4D])
TEXT_FLIP = bytes([ESC, 0x56])
TEXT_JUSTIFY = bytes([ESC, 0x61])
TEXT_REVERSE = bytes([GS, 0x42])
TEXT_SMOOTHING = bytes([GS, 0x62])
TEXT_SIZE = bytes([GS, 0x21])
TEXT_UPSIDE_DOWN = bytes([ESC, 0x7B])

# Feed and spacing
PAPER_FEED = bytes([ESC, 0x64])
LINE_SPACING = bytes([ESC, 0x33])
LINE_SPACING_DEFAULT = bytes([ESC, 0x32])
MOTION_UNITS = bytes([GS, 0x50])

# Cash drawer
CASH_DRAWER = bytes([ESC, 0x70])

# 1D barcodes
BARCODE_WIDTH = bytes([GS, 0x77])
BARCODE_HEIGHT = bytes([GS, 0x68])
BARCODE_FONT = bytes([GS, 0x66])
BARCODE_POSITION = bytes([GS, 0x48])
BARCODE_PRINT = bytes([GS, 0x6B])

# 2D symbols: GS ( k pL pH cn fn ...
CODE_2D = bytes([GS, 0x28, 0x6B])

# Raster bit image: GS v 0 m xL xH yL yH d1...dk
BIT_IMAGE = bytes([GS, 0x76, 0x30])

# Real-time status: DLE EOT n [a]
REAL_TIME_STATUS = bytes([DLE, EOT])
