"""CHIP-8 execution engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from pychip8.bus import PROGRAM_START, Memory
from pychip8.errors import (
    CapacityExceededError,
    CPUError,
    RecoverableFault,
    StackUnderflowError,
    UnknownOpcodeError,
)
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video.font import glyph_address
from pychip8.video.framebuffer import FrameBuffer

from .opcodes import OPCODE_TABLE, Decoded, Instruction, decode
from .timers import Timers

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG = 0xF

# PC advance returned by instruction handlers.
NEXT = 2
SKIP = 4
JUMPED = 0


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file and call stack."""

    pc: int = PROGRAM_START
    i: int = 0x000
    v: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    sp: int = 0
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)

    def clone(self) -> "CPUState":
        return CPUState(self.pc, self.i, list(self.v), self.sp, list(self.stack))


@dataclass
class Chip8CPU:
    """Fetch/decode/execute engine bound to the interpreter's components."""

    memory: Memory
    framebuffer: FrameBuffer
    keypad: Keypad
    timers: Timers
    instruction_table: Sequence[Sequence[Instruction]] = field(default=OPCODE_TABLE)
    rng: random.Random = field(default_factory=random.Random)

    state: CPUState = field(default_factory=CPUState)
    cycle_count: int = 0
    waiting_register: int | None = None

    def __post_init__(self) -> None:
        for bucket in self.instruction_table:
            for instruction in bucket:
                if not callable(getattr(self, instruction.handler, None)):
                    raise CPUError(f"handler '{instruction.handler}' not implemented")

    def reset(self) -> None:
        """Reset the register file; the other components are reset by the machine."""

        self.state = CPUState()
        self.cycle_count = 0
        self.waiting_register = None

    @property
    def waiting_for_key(self) -> bool:
        return self.waiting_register is not None

    def step(self) -> Decoded | None:
        """Execute a single cycle.

        Returns the decoded instruction, or ``None`` when the cycle was spent
        polling the keypad for ``LD K``. A ``RecoverableFault`` is re-raised
        after PC has been moved past the offending word.
        """

        self.cycle_count += 1

        if self.waiting_register is not None:
            self._poll_key()
            return None

        pc_before = self.state.pc
        try:
            word = self.memory.load16(pc_before)
            decoded = decode(word, self.instruction_table)
            if decoded is None:
                raise UnknownOpcodeError(word)
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, word, decoded.mnemonic)
            handler = getattr(self, decoded.instruction.handler)
            advance = handler(decoded)
        except RecoverableFault:
            self.state.pc = (pc_before + NEXT) & 0xFFF
            raise
        self.state.pc = (self.state.pc + advance) & 0xFFF
        return decoded

    def _poll_key(self) -> None:
        key = self.keypad.take_press_edge()
        if key is None:
            return
        register = self.waiting_register
        self.waiting_register = None
        self.state.v[register] = key
        self.state.pc = (self.state.pc + NEXT) & 0xFFF
        if debug_enabled("input"):
            debug_log("input", "wait_key resolved V%X=%X", register, key)

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_cls(self, _: Decoded) -> int:
        self.framebuffer.clear()
        return NEXT

    def op_ret(self, _: Decoded) -> int:
        state = self.state
        if state.sp == 0:
            raise StackUnderflowError(f"return with empty stack at pc={state.pc:#05x}")
        state.sp -= 1
        state.pc = state.stack[state.sp]
        return NEXT

    def op_jp(self, decoded: Decoded) -> int:
        self.state.pc = decoded.nnn
        return JUMPED

    def op_call(self, decoded: Decoded) -> int:
        state = self.state
        if state.sp >= STACK_DEPTH:
            raise CapacityExceededError(f"call stack overflow at pc={state.pc:#05x}")
        state.stack[state.sp] = state.pc
        state.sp += 1
        state.pc = decoded.nnn
        return JUMPED

    def op_jp_v0(self, decoded: Decoded) -> int:
        self.state.pc = (decoded.nnn + self.state.v[0]) & 0xFFF
        return JUMPED

    def op_se_immediate(self, decoded: Decoded) -> int:
        return SKIP if self.state.v[decoded.x] == decoded.nn else NEXT

    def op_sne_immediate(self, decoded: Decoded) -> int:
        return SKIP if self.state.v[decoded.x] != decoded.nn else NEXT

    def op_se_register(self, decoded: Decoded) -> int:
        v = self.state.v
        return SKIP if v[decoded.x] == v[decoded.y] else NEXT

    def op_sne_register(self, decoded: Decoded) -> int:
        v = self.state.v
        return SKIP if v[decoded.x] != v[decoded.y] else NEXT

    def op_ld_immediate(self, decoded: Decoded) -> int:
        self.state.v[decoded.x] = decoded.nn
        return NEXT

    def op_add_immediate(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x] = (v[decoded.x] + decoded.nn) & 0xFF
        return NEXT

    def op_ld_register(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x] = v[decoded.y]
        return NEXT

    # The logical ops clear VF, as the original COSMAC VIP interpreter does.
    def op_or(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x] |= v[decoded.y]
        v[FLAG] = 0
        return NEXT

    def op_and(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x] &= v[decoded.y]
        v[FLAG] = 0
        return NEXT

    def op_xor(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x] ^= v[decoded.y]
        v[FLAG] = 0
        return NEXT

    def op_add_register(self, decoded: Decoded) -> int:
        v = self.state.v
        total = v[decoded.x] + v[decoded.y]
        v[decoded.x] = total & 0xFF
        v[FLAG] = 1 if total > 0xFF else 0
        return NEXT

    def op_sub(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x], v[FLAG] = self._subtract(v[decoded.x], v[decoded.y])
        return NEXT

    def op_subn(self, decoded: Decoded) -> int:
        v = self.state.v
        v[decoded.x], v[FLAG] = self._subtract(v[decoded.y], v[decoded.x])
        return NEXT

    def op_shr(self, decoded: Decoded) -> int:
        v = self.state.v
        value = v[decoded.x]
        v[decoded.x] = value >> 1
        v[FLAG] = value & 0x01
        return NEXT

    def op_shl(self, decoded: Decoded) -> int:
        v = self.state.v
        value = v[decoded.x]
        v[decoded.x] = (value << 1) & 0xFF
        v[FLAG] = (value >> 7) & 0x01
        return NEXT

    def op_ld_index(self, decoded: Decoded) -> int:
        self.state.i = decoded.nnn
        return NEXT

    def op_rnd(self, decoded: Decoded) -> int:
        self.state.v[decoded.x] = self.rng.randrange(0x100) & decoded.nn
        return NEXT

    def op_drw(self, decoded: Decoded) -> int:
        v = self.state.v
        x = v[decoded.x]
        y = v[decoded.y]
        rows = self.memory.load_block(self.state.i, decoded.n)
        v[FLAG] = 0
        if self.framebuffer.draw_sprite(x, y, rows):
            v[FLAG] = 1
        return NEXT

    def op_skp(self, decoded: Decoded) -> int:
        return SKIP if self.keypad.is_pressed(self.state.v[decoded.x]) else NEXT

    def op_sknp(self, decoded: Decoded) -> int:
        return NEXT if self.keypad.is_pressed(self.state.v[decoded.x]) else SKIP

    def op_ld_from_delay(self, decoded: Decoded) -> int:
        self.state.v[decoded.x] = self.timers.delay
        return NEXT

    def op_wait_key(self, decoded: Decoded) -> int:
        # Only presses made after this instruction count.
        self.keypad.clear_press_edge()
        self.waiting_register = decoded.x
        return JUMPED

    def op_ld_delay(self, decoded: Decoded) -> int:
        self.timers.set_delay(self.state.v[decoded.x])
        return NEXT

    def op_ld_sound(self, decoded: Decoded) -> int:
        self.timers.set_sound(self.state.v[decoded.x])
        return NEXT

    def op_add_index(self, decoded: Decoded) -> int:
        state = self.state
        total = state.i + state.v[decoded.x]
        state.v[FLAG] = 1 if total > 0xFFF else 0
        state.i = total & 0xFFF
        return NEXT

    def op_ld_font(self, decoded: Decoded) -> int:
        self.state.i = glyph_address(self.state.v[decoded.x])
        return NEXT

    def op_bcd(self, decoded: Decoded) -> int:
        value = self.state.v[decoded.x]
        self.memory.store_block(self.state.i, (value // 100, (value // 10) % 10, value % 10))
        return NEXT

    def op_store_registers(self, decoded: Decoded) -> int:
        state = self.state
        count = decoded.x + 1
        self.memory.store_block(state.i, state.v[:count])
        state.i = (state.i + count) & 0xFFF
        return NEXT

    def op_load_registers(self, decoded: Decoded) -> int:
        state = self.state
        count = decoded.x + 1
        state.v[:count] = self.memory.load_block(state.i, count)
        state.i = (state.i + count) & 0xFFF
        return NEXT

    # ------------------------------------------------------------------
    # Arithmetic helpers

    @staticmethod
    def _subtract(minuend: int, subtrahend: int) -> tuple[int, int]:
        """Return ``(result, flag)`` where flag is 0 on borrow, 1 otherwise."""

        return (minuend - subtrahend) & 0xFF, 0 if subtrahend > minuend else 1
