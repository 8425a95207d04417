#!/usr/bin/env python3

"""
Delay Timer

Counts down towards zero at 60Hz.  The CPU only ever sets and reads the
counter; the host is responsible for calling 'tick' on its own clock, which
keeps the timer rate independent of the instruction rate.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timer:
    def __init__(self):
        self.value = 0

    def set(self, value):
        self.value = value

    def get(self):
        return self.value

    def tick(self, count=1):
        self.value = max(0, self.value - count)
