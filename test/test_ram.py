#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from tcchip.constants import FONT_SIZE, MEM_SIZE, PROGRAM_LOC, STACK_BASE, SYSTEM_FONT
from tcchip.ram import RAM, RAMError, Memory


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual("", ram.mem.hex())

    def test_ram_resize(self):
        self.assertEqual("0000000000", self.ram.mem.hex())
        self.ram.resize(2)
        self.assertEqual("0000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())
        self.assertEqual(255, self.ram.read(1))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())
        self.assertEqual(b"\xFD\xFE", bytes(self.ram.read_block(1, 2)))

    def test_ram_words_big_endian(self):
        self.ram.write_word(2, 0xABCD)
        self.assertEqual("0000abcd00", self.ram.mem.hex())
        self.assertEqual(0xABCD, self.ram.read_word(2))

    def test_ram_byte_overflow(self):
        self.assertRaises(RAMError, self.ram.write, 5, 255)
        self.assertRaises(RAMError, self.ram.read, 5)
        self.assertRaises(RAMError, self.ram.read, -1)

    def test_ram_block_overflow(self):
        self.assertRaises(RAMError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        self.assertRaises(RAMError, self.ram.read_block, 4, 2)
        self.assertRaises(RAMError, self.ram.read_word, 4)

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.assertEqual("fcfdfeff00", self.ram.mem.hex())
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.assertEqual("00fdfe0000", self.ram.mem.hex())
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())


class TestMemory(unittest.TestCase):
    def test_memory_layout(self):
        memory = Memory(b"\x12\x34\x56")
        self.assertEqual(MEM_SIZE, memory.mem_size)
        self.assertEqual(SYSTEM_FONT, bytes(memory.read_block(0, FONT_SIZE)))
        self.assertEqual(0x1234, memory.read_word(PROGRAM_LOC))
        self.assertEqual(0x56, memory.read(PROGRAM_LOC + 2))
        self.assertEqual(0x00, memory.read(PROGRAM_LOC + 3))
        self.assertEqual(0x00, memory.read(FONT_SIZE))

    def test_memory_accepts_lists(self):
        memory = Memory([0x60, 0x05])
        self.assertEqual(0x6005, memory.read_word(PROGRAM_LOC))

    def test_memory_largest_program(self):
        memory = Memory(b"\xAA" * (STACK_BASE - PROGRAM_LOC))
        self.assertEqual(0xAA, memory.read(STACK_BASE - 1))
        self.assertEqual(0x00, memory.read(STACK_BASE))

    def test_memory_program_too_large(self):
        self.assertRaises(RAMError, Memory, b"\xAA" * (STACK_BASE - PROGRAM_LOC + 1))

    def test_memory_font_read_only(self):
        memory = Memory(b"")
        self.assertRaises(RAMError, memory.write, 0, 0xFF)
        self.assertRaises(RAMError, memory.write, FONT_SIZE - 1, 0xFF)
        self.assertRaises(RAMError, memory.write_block, FONT_SIZE - 1, b"\x01\x02")
        self.assertRaises(RAMError, memory.write_word, FONT_SIZE - 2, 0xFFFF)
        memory.write(FONT_SIZE, 0xFF)
        self.assertEqual(0xFF, memory.read(FONT_SIZE))
        self.assertEqual(SYSTEM_FONT, bytes(memory.read_block(0, FONT_SIZE)))

    def test_memory_out_of_range(self):
        memory = Memory(b"")
        self.assertRaises(RAMError, memory.read, MEM_SIZE)
        self.assertRaises(RAMError, memory.read_word, MEM_SIZE - 1)
        self.assertRaises(RAMError, memory.write_block, MEM_SIZE - 1, b"\x01\x02")
