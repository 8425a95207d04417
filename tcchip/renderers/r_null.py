#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or to run programs headless.  It never asks the host to quit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.frames_drawn = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def refresh_display(self, display):
        # Only draw when something changed since the last frame
        if not display.changed:
            return False

        width, height = display.get_vid_size()

        if (width, height) != (self.width, self.height):
            self.set_resolution(width, height)

        self.draw_frame(display.get_pixels())
        display.changed = False
        self.frames_drawn += 1
        return True

    def draw_frame(self, pixels):
        pass

    def process_messages(self):
        return False  # Don't exit the program

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
