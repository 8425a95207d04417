#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the display onto an SDL window surface via PyGame.  The surface is
allocated at the size of the emulated display, and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.

Window messages are pumped here too, so closing the window or pressing Escape
asks the host to stop.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, smoothing=0, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.smoothing = smoothing
        colour_map = [0x222222, 0xDDDDDD]  # Unlit, lit

        # Override the colours with a user-defined palette, if necessary
        if palette is not None:
            palette_split = palette.split(",")

            if len(palette_split) > 2:
                raise RendererError("Too many palette colours defined.")

            for colour_num, colour in enumerate(palette_split):
                if len(colour) != 6:
                    raise RendererError("Palette colours must all be 6 hex digits long.")

                try:
                    colour_map[colour_num] = int(colour, 16)
                except ValueError:
                    raise RendererError("Invalid palette colour defined.") from None

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes([i >> 16, (i >> 8) & 0xFF, i & 0xFF]) for i in colour_map]

        super().__init__(scale)

    def set_resolution(self, width, height):
        self.rgb_buffer = memoryview(bytearray(width * height * 3))  # 24-bit
        super().set_resolution(width, height)

    def draw_frame(self, pixels):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_buffer = self.rgb_buffer
        unlit, lit = self.rgb_map

        for location, pixel in enumerate(pixels):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = lit if pixel else unlit

        # Blit the bytearray straight to the surface
        render_surface = pygame.image.frombuffer(rgb_buffer, (self.width, self.height), "RGB")

        # Apply Scale2x rendering passes if requested
        for _ in range(self.smoothing):
            render_surface = pygame.transform.scale2x(render_surface)

        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()

    def process_messages(self):
        quit_program = False

        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYUP and event.key == pygame.K_ESCAPE):
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame can segfault if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
