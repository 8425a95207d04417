#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from tcchip.timer import Timer


class TestTimer(unittest.TestCase):
    def setUp(self):
        self.timer = Timer()

    def test_timer_set_get(self):
        self.assertEqual(0, self.timer.get())
        self.timer.set(0x3C)
        self.assertEqual(0x3C, self.timer.get())

    def test_timer_tick(self):
        self.timer.set(3)
        self.timer.tick()
        self.assertEqual(2, self.timer.get())
        self.timer.tick(2)
        self.assertEqual(0, self.timer.get())

    def test_timer_clamps_at_zero(self):
        self.timer.tick()
        self.assertEqual(0, self.timer.get())
        self.timer.set(2)
        self.timer.tick(5)
        self.assertEqual(0, self.timer.get())
