#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to 'step' runs exactly one fetch, decode and execute cycle, and then returns
control to the host.  The CPU never waits, never decrements its own timer,
and never presents the display; the host does all of that on its own clock.

The CPU owns the system RAM, call stack, display and delay timer, and is
built straight from a program image.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import APP_INTRO, FONT_GLYPH_SIZE, FONT_LOC, INDEX_BITMASK, PROGRAM_LOC, WORD_SIZE
from .debugger import Debugger
from .display import Display
from .opcode import CPUError, DecodeError, Op, decode, disassemble
from .ram import Memory
from .stack import Stack
from .timer import Timer


class CPU:
    def __init__(self, program, rng=None, allow_wrapping=True, debugger=None):
        self.ram = Memory(program)
        self.stack = Stack(self.ram)
        self.display = Display(allow_wrapping=allow_wrapping)
        self.delay_timer = Timer()
        self.rng = Random() if rng is None else rng
        self.debugger = Debugger() if debugger is None else debugger

        # Initialise registers
        self.v = memoryview(bytearray(16))  # Vf doubles as the carry, borrow and collision flag
        self.i = 0                          # Index register

        # Initialise program counter and current opcode
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = 0

        self.instructions = {
            Op.CLS: self._00E0,
            Op.RET: self._00EE,
            Op.JMP: self._1nnn,
            Op.CALL: self._2nnn,
            Op.SKE_BYTE: self._3xkk,
            Op.SKNE_BYTE: self._4xkk,
            Op.SKE_REG: self._5xy0,
            Op.MOV_BYTE: self._6xkk,
            Op.ADD_BYTE: self._7xkk,
            Op.MOV_REG: self._8xy0,
            Op.OR: self._8xy1,
            Op.AND: self._8xy2,
            Op.XOR: self._8xy3,
            Op.ADD_REG: self._8xy4,
            Op.SUB: self._8xy5,
            Op.SHR: self._8xy6,
            Op.RSUB: self._8xy7,
            Op.SHL: self._8xyE,
            Op.SKNE_REG: self._9xy0,
            Op.MOV_I: self._Annn,
            Op.JMP_V0: self._Bnnn,
            Op.RND: self._Cxkk,
            Op.DRW: self._Dxyn,
            Op.MOV_FROM_DT: self._Fx07,
            Op.MOV_DT: self._Fx15,
            Op.ADD_I: self._Fx1E,
            Op.FONT: self._Fx29,
            Op.BCD: self._Fx33,
            Op.STR: self._Fx55,
            Op.LD: self._Fx65
        }

        missing = set(Op) - set(self.instructions)

        if missing:
            raise CPUError("No handler for {}".format(", ".join(sorted(op.name for op in missing))))

    @property
    def sp(self):
        return self.stack.sp

    def fetch(self):
        return self.ram.read_word(self.pc)

    def inc_pc(self):
        self.pc += WORD_SIZE

    def step(self):
        # Keep track of the program counter before altering it, for crash reports
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute

        try:
            instruction = decode(self.opcode, self.debug_pc)
        except DecodeError:
            self._opcode_unsupported()

        if self.debugger.is_live():
            self.debugger.output(self, disassemble(instruction))

        self.instructions[instruction.op](instruction)
        return instruction

    def _opcode_unsupported(self):
        raise DecodeError(
            self.opcode, self.debug_pc,
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not a recognised instruction."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), self.opcode, self.debug_pc
            )
        ) from None

    def _skip_if(self, predicate):
        if predicate:
            self.inc_pc()

    def _00E0(self, ins):  # CLS
        self.display.clear()

    def _00EE(self, ins):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, ins):  # JMP addr
        self.pc = ins.addr

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.pc)
        self.pc = ins.addr

    def _3xkk(self, ins):  # SKE Vx, byte
        self._skip_if(self.v[ins.x] == ins.kk)

    def _4xkk(self, ins):  # SKNE Vx, byte
        self._skip_if(self.v[ins.x] != ins.kk)

    def _5xy0(self, ins):  # SKE Vx, Vy
        self._skip_if(self.v[ins.x] == self.v[ins.y])

    def _6xkk(self, ins):  # MOV Vx, byte
        self.v[ins.x] = ins.kk

    def _7xkk(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.v[ins.x] = (self.v[ins.x] + ins.kk) & 0xFF

    def _8xy0(self, ins):  # MOV Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.x] |= self.v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.x] &= self.v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.x] ^= self.v[ins.y]

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, ins, val):  # Post-SUB/RSUB
        self.v[ins.x] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.x] - self.v[ins.y])

    def _8xy6(self, ins):  # SHR Vx
        val = self.v[ins.x]
        self.v[ins.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self, ins):  # RSUB Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.y] - self.v[ins.x])

    def _8xyE(self, ins):  # SHL Vx
        val = self.v[ins.x]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self, ins):  # SKNE Vx, Vy
        self._skip_if(self.v[ins.x] != self.v[ins.y])

    def _Annn(self, ins):  # MOV I, addr
        self.i = ins.addr

    def _Bnnn(self, ins):  # JMP V0, addr
        # Not wrapped.  A jump past the end of RAM is caught by the next fetch.
        self.pc = ins.addr + self.v[0]

    def _Cxkk(self, ins):  # RND Vx, byte
        # Uniform over 0 to 'byte' inclusive
        self.v[ins.x] = self.rng.randint(0, ins.kk)

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        sprite = self.ram.read_block(self.i, ins.n)
        self.v[0xF] = int(self.display.draw(sprite, self.v[ins.x], self.v[ins.y]))

    def _Fx07(self, ins):  # MOV Vx, DT
        self.v[ins.x] = self.delay_timer.get()

    def _Fx15(self, ins):  # MOV DT, Vx
        self.delay_timer.set(self.v[ins.x])

    def _Fx1E(self, ins):  # ADD I, Vx
        self.i = (self.i + self.v[ins.x]) & INDEX_BITMASK

    def _Fx29(self, ins):  # FONT Vx
        self.i = FONT_LOC + FONT_GLYPH_SIZE * (self.v[ins.x] & 0xF)

    def _Fx33(self, ins):  # BCD Vx
        val = self.v[ins.x]
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _Fx55(self, ins):  # STR [I], Vx
        # Ensure with +1s that the final register is copied.  I is left alone.
        self.ram.write_block(self.i, self.v[:ins.x + 1])

    def _Fx65(self, ins):  # LD Vx, [I]
        self.v[:ins.x + 1] = self.ram.read_block(self.i, ins.x + 1)
