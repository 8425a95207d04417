#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory, individual bytes and
big-endian words.  Every access is bounds-checked, so a misbehaving program
raises an error rather than reading or corrupting memory it doesn't own.

System memory is laid out as follows:
    0x000 - 0x04F  Built-in hex font (read-only)
    0x200 - 0xFDF  Program
    0xFE0 - 0xFFF  Call stack (16 return addresses, growing downwards)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FONT_LOC, FONT_SIZE, MEM_SIZE, PROGRAM_LOC, STACK_BASE, SYSTEM_FONT

CPU_ENDIAN = "big"  # CHIP-8 is big-endian


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_bounds(location, size)
        return self.mem[location:location + size]

    def read_word(self, location):
        return int.from_bytes(self.read_block(location, 2), CPU_ENDIAN, signed=False)

    def write(self, location, byte):
        self.check_writable(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        self.check_writable(location, block_size)
        self.mem[location:location + block_size] = block

    def write_word(self, location, value):
        self.write_block(location, (value & 0xFFFF).to_bytes(2, CPU_ENDIAN))

    def check_bounds(self, location, size=1):
        if location < 0 or location + size - 1 > self.mem_top:
            raise RAMError(
                "Memory access of {} byte(s) at 0x{:04x} is outside 0x0000-0x{:04x}".format(
                    size, location, self.mem_top
                )
            )

    def check_writable(self, location, size=1):
        self.check_bounds(location, size)

    def zero_block(self, offset, size):
        self.check_writable(offset, size)
        self.mem[offset:offset + size] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)


class Memory(RAM):
    # System RAM, with the font written in and locked, and a program loaded above it
    def __init__(self, program):
        space = STACK_BASE - PROGRAM_LOC

        if len(program) > space:
            raise RAMError("Program is {} bytes, but only {} bytes are available".format(len(program), space))

        super().__init__(MEM_SIZE)
        self.mem[FONT_LOC:FONT_LOC + FONT_SIZE] = SYSTEM_FONT
        self.mem[PROGRAM_LOC:PROGRAM_LOC + len(program)] = bytes(program)

    def check_writable(self, location, size=1):
        self.check_bounds(location, size)

        if location < FONT_LOC + FONT_SIZE and location + size > FONT_LOC:
            raise RAMError("Write to read-only font area at 0x{:03x}".format(location))
