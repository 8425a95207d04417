#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from tcchip.cpu import CPU, DecodeError
from tcchip.host import Host
from tcchip.renderers.r_null import Renderer

# Sets the delay timer to 0x3C, then loops forever
TIMER_LOOP = b"\x60\x3C\xF0\x15\x12\x04"


class QuittingRenderer(Renderer):
    def __init__(self, quit_after):
        self.quit_after = quit_after
        self.messages_processed = 0
        super().__init__()

    def process_messages(self):
        self.messages_processed += 1
        return self.messages_processed > self.quit_after


class TestHost(unittest.TestCase):
    def setUp(self):
        self.cpu = CPU(TIMER_LOOP)
        self.renderer = Renderer()

    def test_host_run_cycles(self):
        host = Host(self.cpu, self.renderer, clock_speed=0)
        self.assertFalse(host.run(5))
        self.assertEqual(5, host.cycles)
        self.assertEqual(0x3C, self.cpu.v[0])
        self.assertEqual(0x204, self.cpu.pc)

    def test_host_renders_first_frame(self):
        host = Host(self.cpu, self.renderer, clock_speed=0)
        host.run(1)
        self.assertEqual(1, self.renderer.frames_drawn)
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertFalse(self.cpu.display.changed)

    def test_host_quit(self):
        renderer = QuittingRenderer(quit_after=0)
        host = Host(self.cpu, renderer, clock_speed=0)
        self.assertTrue(host.run())
        self.assertEqual(0, host.cycles)

    def test_host_decay_timer(self):
        host = Host(self.cpu, self.renderer, clock_speed=0)
        host.run(2)
        self.assertEqual(0x3C, self.cpu.delay_timer.get())

        # Timer decays at 60Hz, regardless of how many instructions ran
        host.decay_timer(host.timer_origin + 0.51)
        self.assertEqual(0x3C - 30, self.cpu.delay_timer.get())
        host.decay_timer(host.timer_origin + 0.51)
        self.assertEqual(0x3C - 30, self.cpu.delay_timer.get())
        host.decay_timer(host.timer_origin + 10.0)
        self.assertEqual(0, self.cpu.delay_timer.get())

    def test_host_clock_speed(self):
        self.assertIsNone(Host(self.cpu, self.renderer, clock_speed=0).core_interval)
        self.assertIsNone(Host(self.cpu, self.renderer, clock_speed=None).core_interval)
        self.assertEqual(0.01, Host(self.cpu, self.renderer, clock_speed=100).core_interval)

    def test_host_decode_error_propagates(self):
        host = Host(CPU(b"\xFF\xFF"), self.renderer, clock_speed=0)
        self.assertRaises(DecodeError, host.run, 10)
