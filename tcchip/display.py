#!/usr/bin/env python3

"""
Display Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, and the screen can be
cleared.  Nothing else changes what is shown.

Each pixel is stored as one byte in a dedicated RAM bank (0x00 for off, 0xFF
for on), in rows from the top-left corner.  The host gets read-only access to
this bank for rendering, and watches the 'changed' flag to avoid redrawing
frames that are identical to the last.

Collisions (where any pixel was set, but was unset by an XOR) are reported
back from each draw.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_HEIGHT, VID_WIDTH
from .ram import RAM


class Display:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT, allow_wrapping=True):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.allow_wrapping = allow_wrapping
        self.ram_bank = RAM(self.vid_size)
        self.changed = True  # Force a first frame to be shown

    def clear(self):
        self.ram_bank.clear()
        self.changed = True

    def draw(self, sprite, x, y):
        # Each byte of the sprite is one 8-pixel row, most significant bit on the left.  The sprite's start always
        # wraps.  The remainder either wraps too, or is clipped at the right and bottom edges.
        vid_width = self.vid_width
        vid_height = self.vid_height
        x %= vid_width
        y %= vid_height
        collision = False

        for row, spr_data in enumerate(sprite):
            scr_y = y + row

            if scr_y >= vid_height:
                if not self.allow_wrapping:
                    break

                scr_y %= vid_height

            for col in range(8):
                if not spr_data & (0x80 >> col):
                    continue

                scr_x = x + col

                if scr_x >= vid_width:
                    if not self.allow_wrapping:
                        break

                    scr_x %= vid_width

                if self._xor_pixel(scr_x, scr_y):
                    # Don't stop drawing.  Just remember it happened.
                    collision = True

        self.changed = True
        return collision

    def _xor_pixel(self, x, y):
        vram_loc = y * self.vid_width + x
        pixel = self.ram_bank.read(vram_loc)
        self.ram_bank.write(vram_loc, pixel ^ 0xFF)
        return pixel != 0

    def get_pixel(self, x, y):
        if not (0 <= x < self.vid_width and 0 <= y < self.vid_height):
            raise IndexError("Pixel ({}, {}) is off screen".format(x, y))

        return self.ram_bank.read(y * self.vid_width + x) != 0

    def get_pixels(self):
        return self.ram_bank.mem.toreadonly()

    def get_vid_size(self):
        return self.vid_width, self.vid_height
