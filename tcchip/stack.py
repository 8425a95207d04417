#!/usr/bin/env python3

"""
Stack Emulator

The call stack lives in the top 32 bytes of system RAM, holding up to 16
return addresses.  The stack pointer starts just past the top of RAM and moves
down by one word on every push, so the most recent return address is always
at the lowest occupied location.

Running off either end of the stack region is reported as a StackError rather
than being allowed to spill into program memory.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_BASE, STACK_TOP, WORD_SIZE


class StackError(Exception):
    pass


class Stack:
    def __init__(self, ram, base=STACK_BASE, top=STACK_TOP):
        self.ram = ram
        self.base = base
        self.top = top
        self.sp = top

    def push(self, item):
        if self.sp - WORD_SIZE < self.base:
            raise StackError("Stack overflow")

        self.sp -= WORD_SIZE
        self.ram.write_word(self.sp, item)

    def pop(self):
        if self.sp >= self.top:
            raise StackError("Stack underflow")

        item = self.ram.read_word(self.sp)
        self.sp += WORD_SIZE
        return item

    def get_items(self):
        # For debugging.  Oldest first.
        return [self.ram.read_word(loc) for loc in range(self.top - WORD_SIZE, self.sp - 1, -WORD_SIZE)]
