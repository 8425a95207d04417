#!/usr/bin/env python3

"""
Opcode Decoder

Every instruction is a single big-endian 16-bit word.  The word is split into
four nibbles, and matched against a table of nibble patterns.  Hex digits in a
pattern must match exactly, while letters are operand fields:
    x/y = register (0-15)
    kk  = byte
    nnn = address
    n   = nibble (sprite height)

Decoding is pure: a word always decodes to the same Instruction, and nothing
else is touched.  Words matching no pattern raise a DecodeError.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import Enum


class CPUError(Exception):
    pass


class DecodeError(CPUError):
    def __init__(self, opcode, address=None, message=None):
        self.opcode = opcode
        self.address = address

        if message is None:
            if address is None:
                message = "Opcode 0x{:04x} is not a recognised instruction.".format(opcode)
            else:
                message = "Opcode 0x{:04x} at address 0x{:03x} is not a recognised instruction.".format(
                    opcode, address
                )

        super().__init__(message)


class Op(Enum):
    CLS = "CLS"
    RET = "RET"
    JMP = "JMP"
    JMP_V0 = "JMP V0"
    CALL = "CALL"
    SKE_BYTE = "SKE Vx, byte"
    SKNE_BYTE = "SKNE Vx, byte"
    SKE_REG = "SKE Vx, Vy"
    SKNE_REG = "SKNE Vx, Vy"
    MOV_BYTE = "MOV Vx, byte"
    MOV_REG = "MOV Vx, Vy"
    MOV_I = "MOV I, addr"
    MOV_DT = "MOV DT, Vx"
    MOV_FROM_DT = "MOV Vx, DT"
    ADD_BYTE = "ADD Vx, byte"
    ADD_REG = "ADD Vx, Vy"
    ADD_I = "ADD I, Vx"
    SUB = "SUB Vx, Vy"
    RSUB = "RSUB Vx, Vy"
    OR = "OR Vx, Vy"
    AND = "AND Vx, Vy"
    XOR = "XOR Vx, Vy"
    SHR = "SHR Vx"
    SHL = "SHL Vx"
    RND = "RND Vx, byte"
    DRW = "DRW Vx, Vy, nibble"
    FONT = "FONT Vx"
    BCD = "BCD Vx"
    STR = "STR [I], Vx"
    LD = "LD Vx, [I]"


INSTRUCTION_PATTERNS = (
    ("00E0", Op.CLS),
    ("00EE", Op.RET),
    ("1nnn", Op.JMP),
    ("2nnn", Op.CALL),
    ("3xkk", Op.SKE_BYTE),
    ("4xkk", Op.SKNE_BYTE),
    ("5xy0", Op.SKE_REG),
    ("6xkk", Op.MOV_BYTE),
    ("7xkk", Op.ADD_BYTE),
    ("8xy0", Op.MOV_REG),
    ("8xy1", Op.OR),
    ("8xy2", Op.AND),
    ("8xy3", Op.XOR),
    ("8xy4", Op.ADD_REG),
    ("8xy5", Op.SUB),
    ("8xy6", Op.SHR),
    ("8xy7", Op.RSUB),
    ("8xyE", Op.SHL),
    ("9xy0", Op.SKNE_REG),
    ("Annn", Op.MOV_I),
    ("Bnnn", Op.JMP_V0),
    ("Cxkk", Op.RND),
    ("Dxyn", Op.DRW),
    ("Fx07", Op.MOV_FROM_DT),
    ("Fx15", Op.MOV_DT),
    ("Fx1E", Op.ADD_I),
    ("Fx29", Op.FONT),
    ("Fx33", Op.BCD),
    ("Fx55", Op.STR),
    ("Fx65", Op.LD)
)

Instruction = namedtuple("Instruction", ["op", "opcode", "x", "y", "kk", "addr", "n"])


class Opcode:
    def __init__(self, word):
        if not 0 <= word <= 0xFFFF:
            raise ValueError("Opcode 0x{:x} is not a 16-bit word".format(word))

        self.word = word

    def nibble(self, position):
        # Position 0 is the most significant nibble
        if not 0 <= position <= 3:
            raise IndexError("Nibble position {} out of range".format(position))

        return (self.word >> (12 - position * 4)) & 0xF

    @property
    def nibbles(self):
        return tuple(self.nibble(position) for position in range(4))

    @property
    def reg1(self):
        return (self.word & 0xF00) >> 8

    @property
    def reg2(self):
        return (self.word & 0xF0) >> 4

    @property
    def byte(self):
        return self.word & 0xFF

    @property
    def address(self):
        return self.word & 0xFFF

    @property
    def size_nibble(self):
        return self.word & 0xF


def _compile_pattern(pattern):
    # Map each pattern to a (mask, value) pair, so wildcard nibbles are masked out
    mask = 0
    value = 0

    for char in pattern:
        mask <<= 4
        value <<= 4

        if char in "0123456789ABCDEF":
            mask |= 0xF
            value |= int(char, 16)

    return mask, value


# Lookup by first nibble, so only a few patterns are ever checked per decode
_DECODE_TABLE = {}

for _pattern, _op in INSTRUCTION_PATTERNS:
    _DECODE_TABLE.setdefault(int(_pattern[0], 16), []).append(_compile_pattern(_pattern) + (_op,))


def decode(word, address=None):
    opcode = Opcode(word)

    for mask, value, op in _DECODE_TABLE.get(opcode.nibble(0), ()):
        if word & mask == value:
            return Instruction(
                op, word, opcode.reg1, opcode.reg2, opcode.byte, opcode.address, opcode.size_nibble
            )

    raise DecodeError(word, address)


def disassemble(instruction):
    op = instruction.op
    x = "V{:01x}".format(instruction.x)
    y = "V{:01x}".format(instruction.y)
    kk = "0x{:02x}".format(instruction.kk)
    addr = "0x{:03x}".format(instruction.addr)

    if op in (Op.CLS, Op.RET):
        return op.value

    if op in (Op.JMP, Op.CALL):
        return "{} {}".format(op.value, addr)

    if op == Op.JMP_V0:
        return "JMP V0, {}".format(addr)

    if op == Op.MOV_I:
        return "MOV I, {}".format(addr)

    if op == Op.DRW:
        return "DRW {}, {}, 0x{:01x}".format(x, y, instruction.n)

    # Everything else only needs Vx, Vy and byte substituting
    return op.value.replace("Vx", x).replace("Vy", y).replace("byte", kk)
