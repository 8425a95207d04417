#!/usr/bin/env python3

"""
Host Loop

Drives a CPU in real time.  Three things happen here, each on its own clock:
    * Instructions are stepped at the requested clock speed (or as fast as
      possible if uncapped)
    * The delay timer is decayed at 60Hz, by however many ticks have passed
      since it was last decayed
    * The display is handed to the renderer at 60Hz, along with any pending
      window messages

The instruction rate and the timer rate never affect each other.  If the host
gets lagged, the timer simply jumps by several ticks at once.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DISPLAY_FREQ, TIMER_FREQ

DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class Host:
    def __init__(self, cpu, renderer, clock_speed=None):
        self.cpu = cpu
        self.renderer = renderer
        # Clock speed of 0 (or less) is uncapped
        self.core_interval = None if not clock_speed or clock_speed <= 0 else 1.0 / clock_speed
        self.cycles = 0
        self.next_display_update_time = 0
        self.timer_origin = None
        self.timer_ticks = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

    def decay_timer(self, this_time):
        # Work out how many 60Hz ticks should have happened by now, and apply any that haven't
        if self.timer_origin is None:
            self.timer_origin = this_time

        ticks = int((this_time - self.timer_origin) * TIMER_FREQ)

        if ticks > self.timer_ticks:
            self.cpu.delay_timer.tick(ticks - self.timer_ticks)
            self.timer_ticks = ticks

    def run(self, max_cycles=None):
        # Returns True if the renderer asked to quit, or False if the cycle limit was reached
        while max_cycles is None or self.cycles < max_cycles:
            this_time = perf_counter()  # Do this first for maximum precision

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.renderer.set_title(
                    "{} - {} FPS, {} OPS".format(APP_NAME, self.perf_counter_fps, self.perf_counter_ops)
                )
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            # Prevent unnecessary display rendering in excess of host frame rate
            if this_time >= self.next_display_update_time:
                if self.renderer.process_messages():
                    return True

                self.next_display_update_time = this_time + DISPLAY_INTERVAL

                if self.renderer.refresh_display(self.cpu.display):
                    self.perf_counter_fps += 1

            self.decay_timer(this_time)
            self.cpu.step()
            self.cycles += 1
            self.perf_counter_ops += 1

            if self.core_interval is not None:
                # Wait for next CPU instruction, taking into account time spent on this one
                next_time = this_time + self.core_interval

                while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                    pass

        return False
