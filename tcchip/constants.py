#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "TinyChocChip Interpreter"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000       # 4K of system RAM
FONT_LOC = 0x000        # Built-in font lives at the very bottom of RAM
PROGRAM_LOC = 0x200     # Programs are always loaded and started here
STACK_LEVELS = 16
WORD_SIZE = 2           # Instructions and stack entries are both 2 bytes wide
STACK_TOP = MEM_SIZE    # Stack grows downwards from the top of RAM
STACK_BASE = STACK_TOP - STACK_LEVELS * WORD_SIZE

# Index register cap (it can only reference 12-bit addresses)
INDEX_BITMASK = 0xFFF

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Timing
TIMER_FREQ = 60.0          # 60Hz delay timer decay
DISPLAY_FREQ = 60.0        # 60Hz display refresh
DEFAULT_CLOCK_SPEED = 700  # Operations per second

# Hex digit glyphs 0-F, 8x5 pixels each (only the top nibble of each row is used)
FONT_GLYPH_SIZE = 5
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_SIZE = len(SYSTEM_FONT)
