"""A 6502 processor core running programs out of a flat 64 KiB memory."""

import logging
from collections.abc import Callable, Iterable

from nes6502 import flags
from nes6502.memory import Memory
from nes6502.opcodes import AddressingMode, OpCode, lookup

logger = logging.getLogger(__name__)

PROGRAM_START = 0x8000
RESET_VECTOR = 0xFFFC
STACK_PAGE = 0x0100
STACK_RESET = 0xFF

_FLAG_OPS: dict[str, Callable[[int], int]] = {
    "SEC": flags.set_carry,
    "SED": flags.set_decimal,
    "SEI": flags.set_interrupt_disable,
    "CLC": flags.unset_carry,
    "CLD": flags.unset_decimal,
    "CLI": flags.unset_interrupt_disable,
    "CLV": flags.unset_overflow,
}

_BRANCHES: dict[str, tuple[Callable[[int], bool], bool]] = {
    "BNE": (flags.is_zero_set, False),
    "BEQ": (flags.is_zero_set, True),
    "BCC": (flags.is_carry_set, False),
    "BCS": (flags.is_carry_set, True),
    "BMI": (flags.is_negative_set, True),
    "BPL": (flags.is_negative_set, False),
    "BVC": (flags.is_overflow_set, False),
    "BVS": (flags.is_overflow_set, True),
}


class UnsupportedAddressingModeError(ValueError):
    """Raised when an operand address is requested for a mode that has none."""

    def __init__(self, mode: AddressingMode) -> None:
        super().__init__(f"mode {mode.name} is not supported")
        self.mode = mode


class CPU:
    """Registers, status byte, stack pointer and memory of a 6502."""

    def __init__(self) -> None:
        self.register_a = 0
        self.register_x = 0
        self.register_y = 0
        self.status = 0
        self.stack_pointer = STACK_RESET
        self.program_counter = 0
        self.memory = Memory()
        self._ops: dict[str, Callable[[AddressingMode], None]] = {
            "LDA": self._lda,
            "LDX": self._ldx,
            "LDY": self._ldy,
            "STA": lambda mode: self.mem_write(self._operand_address(mode), self.register_a),
            "STX": lambda mode: self.mem_write(self._operand_address(mode), self.register_x),
            "STY": lambda mode: self.mem_write(self._operand_address(mode), self.register_y),
            "TAX": self._tax,
            "TXA": self._txa,
            "TAY": self._tay,
            "TYA": self._tya,
            "INX": self._inx,
            "DEX": self._dex,
            "INY": self._iny,
            "DEY": self._dey,
            "ASL_A": self._asl_accumulator,
            "ASL": self._asl,
            "LSR_A": self._lsr_accumulator,
            "LSR": self._lsr,
            "ROL_A": self._rol_accumulator,
            "ROL": self._rol,
            "ROR_A": self._ror_accumulator,
            "ROR": self._ror,
            "AND": self._and,
            "ORA": self._ora,
            "EOR": self._eor,
            "BIT": self._bit,
            "CMP": lambda mode: self._compare(mode, self.register_a),
            "CPX": lambda mode: self._compare(mode, self.register_x),
            "CPY": lambda mode: self._compare(mode, self.register_y),
            "ADC": lambda mode: self._add_with_carry(mode, subtract=False),
            "SBC": lambda mode: self._add_with_carry(mode, subtract=True),
            "JMP": self._jmp,
            "JSR": self._jsr,
            "RTS": self._rts,
            "PHA": lambda mode: self.push_stack(self.register_a),
            "PLA": self._pla,
            "NOP": lambda mode: None,
        }

    # Memory access

    def mem_read(self, addr: int) -> int:
        return self.memory.read(addr)

    def mem_write(self, addr: int, data: int) -> None:
        self.memory.write(addr, data)

    def mem_read_u16(self, pos: int) -> int:
        return self.memory.read_u16(pos)

    def mem_write_u16(self, pos: int, data: int) -> None:
        self.memory.write_u16(pos, data)

    # Program control

    def reset(self) -> None:
        """Clear registers and jump to the address in the reset vector."""
        self.register_a = 0
        self.register_x = 0
        self.register_y = 0
        self.status = 0
        self.stack_pointer = STACK_RESET
        self.program_counter = self.mem_read_u16(RESET_VECTOR)

    def load(self, program: Iterable[int]) -> None:
        """Copy ``program`` to the program area and point the reset vector at it."""
        self.memory.load(PROGRAM_START, program)
        self.mem_write_u16(RESET_VECTOR, PROGRAM_START)

    def load_and_run(self, program: Iterable[int]) -> None:
        self.load(program)
        self.reset()
        self.run()

    def load_and_run_no_reset(self, program: Iterable[int]) -> None:
        """Load and run ``program`` keeping the current register values."""
        self.load(program)
        self.program_counter = self.mem_read_u16(RESET_VECTOR)
        self.run()

    def run(self) -> None:
        """Execute instructions until a BRK is reached."""
        while True:
            code = self.mem_read(self.program_counter)
            self.program_counter = (self.program_counter + 1) & 0xFFFF
            pc_state = self.program_counter
            opcode = lookup(code)
            logger.debug("%#06X: %s", pc_state - 1, opcode.mnemonic)
            if opcode.mnemonic == "BRK":
                return
            self._execute(opcode)
            if self.program_counter == pc_state:
                self.program_counter = (self.program_counter + opcode.length - 1) & 0xFFFF

    def _execute(self, opcode: OpCode) -> None:
        mnemonic = opcode.mnemonic
        if mnemonic in _FLAG_OPS:
            self.status = _FLAG_OPS[mnemonic](self.status)
        elif mnemonic in _BRANCHES:
            test, expected = _BRANCHES[mnemonic]
            self._branch(test(self.status) == expected)
        else:
            self._ops[mnemonic](opcode.mode)

    # Stack

    def _move_stack_pointer(self, delta: int) -> None:
        new = self.stack_pointer + delta
        if not 0 <= new <= 0xFF:
            raise OverflowError(f"stack pointer {self.stack_pointer:#X} moved out of range")
        self.stack_pointer = new

    def push_stack_u16(self, data: int) -> None:
        self.mem_write_u16(STACK_PAGE | self.stack_pointer, data)
        self._move_stack_pointer(-2)

    def pop_stack(self) -> int:
        self._move_stack_pointer(1)
        return self.mem_read(STACK_PAGE | self.stack_pointer)

    def push_stack(self, data: int) -> None:
        self.mem_write(STACK_PAGE | self.stack_pointer, data)
        self._move_stack_pointer(-1)

    def pop_stack_u16(self) -> int:
        self._move_stack_pointer(2)
        return self.mem_read_u16(STACK_PAGE | self.stack_pointer)

    # Flag helpers

    def _update_flag(self, cond: bool, setter: Callable[[int], int], unsetter: Callable[[int], int]) -> None:
        self.status = setter(self.status) if cond else unsetter(self.status)

    def _update_zero_and_negative(self, result: int) -> None:
        self._update_flag(result == 0, flags.set_zero, flags.unset_zero)
        self._update_flag(flags.is_negative(result), flags.set_negative, flags.unset_negative)

    def _update_carry(self, cond: bool) -> None:
        self._update_flag(cond, flags.set_carry, flags.unset_carry)

    # Addressing

    def _operand_address(self, mode: AddressingMode) -> int:
        pc = self.program_counter
        if mode is AddressingMode.IMMEDIATE:
            return pc
        if mode is AddressingMode.ZERO_PAGE:
            return self.mem_read(pc)
        if mode is AddressingMode.ABSOLUTE:
            return self.mem_read_u16(pc)
        if mode is AddressingMode.ZERO_PAGE_X:
            return (self.mem_read(pc) + self.register_x) & 0xFF
        if mode is AddressingMode.ZERO_PAGE_Y:
            return (self.mem_read(pc) + self.register_y) & 0xFF
        if mode is AddressingMode.ABSOLUTE_X:
            return (self.mem_read_u16(pc) + self.register_x) & 0xFFFF
        if mode is AddressingMode.ABSOLUTE_Y:
            return (self.mem_read_u16(pc) + self.register_y) & 0xFFFF
        if mode is AddressingMode.INDIRECT:
            return self.mem_read_u16(self.mem_read_u16(pc))
        if mode is AddressingMode.INDIRECT_X:
            ptr = (self.mem_read(pc) + self.register_x) & 0xFF
            lo = self.mem_read(ptr)
            hi = self.mem_read((ptr + 1) & 0xFF)
            return (hi << 8) | lo
        if mode is AddressingMode.INDIRECT_Y:
            base = self.mem_read(pc)
            lo = self.mem_read(base)
            hi = self.mem_read((base + 1) & 0xFF)
            return (((hi << 8) | lo) + self.register_y) & 0xFFFF
        raise UnsupportedAddressingModeError(mode)

    def _read_operand(self, mode: AddressingMode) -> int:
        return self.mem_read(self._operand_address(mode))

    # Loads and transfers

    def _lda(self, mode: AddressingMode) -> None:
        self.register_a = self._read_operand(mode)
        self._update_zero_and_negative(self.register_a)

    def _ldx(self, mode: AddressingMode) -> None:
        self.register_x = self._read_operand(mode)
        self._update_zero_and_negative(self.register_x)

    def _ldy(self, mode: AddressingMode) -> None:
        self.register_y = self._read_operand(mode)
        self._update_zero_and_negative(self.register_y)

    def _tax(self, mode: AddressingMode) -> None:
        self.register_x = self.register_a
        self._update_zero_and_negative(self.register_x)

    def _txa(self, mode: AddressingMode) -> None:
        self.register_a = self.register_x
        self._update_zero_and_negative(self.register_a)

    def _tay(self, mode: AddressingMode) -> None:
        self.register_y = self.register_a
        self._update_zero_and_negative(self.register_y)

    def _tya(self, mode: AddressingMode) -> None:
        self.register_a = self.register_y
        self._update_zero_and_negative(self.register_a)

    def _inx(self, mode: AddressingMode) -> None:
        self.register_x = (self.register_x + 1) & 0xFF
        self._update_zero_and_negative(self.register_x)

    def _dex(self, mode: AddressingMode) -> None:
        self.register_x = (self.register_x - 1) & 0xFF
        self._update_zero_and_negative(self.register_x)

    def _iny(self, mode: AddressingMode) -> None:
        self.register_y = (self.register_y + 1) & 0xFF
        self._update_zero_and_negative(self.register_y)

    def _dey(self, mode: AddressingMode) -> None:
        # Derived from X, as the instruction set here defines it.
        self.register_y = (self.register_x - 1) & 0xFF
        self._update_zero_and_negative(self.register_y)

    # Shifts and rotations

    def _shift_left(self, value: int, carry_in: int) -> int:
        self._update_carry(bool(value & 0x80))
        result = ((value << 1) | carry_in) & 0xFF
        self._update_zero_and_negative(result)
        return result

    def _shift_right(self, value: int, carry_in: int) -> int:
        self._update_carry(bool(value & 0x01))
        result = (value >> 1) | (carry_in << 7)
        self._update_zero_and_negative(result)
        return result

    def _modify_memory(self, mode: AddressingMode, op: Callable[[int], int]) -> None:
        addr = self._operand_address(mode)
        self.mem_write(addr, op(self.mem_read(addr)))

    def _asl_accumulator(self, mode: AddressingMode) -> None:
        self.register_a = self._shift_left(self.register_a, 0)

    def _asl(self, mode: AddressingMode) -> None:
        self._modify_memory(mode, lambda v: self._shift_left(v, 0))

    def _lsr_accumulator(self, mode: AddressingMode) -> None:
        self.register_a = self._shift_right(self.register_a, 0)

    def _lsr(self, mode: AddressingMode) -> None:
        self._modify_memory(mode, lambda v: self._shift_right(v, 0))

    def _rol_accumulator(self, mode: AddressingMode) -> None:
        self.register_a = self._shift_left(self.register_a, flags.get_carry(self.status))

    def _rol(self, mode: AddressingMode) -> None:
        carry = flags.get_carry(self.status)
        self._modify_memory(mode, lambda v: self._shift_left(v, carry))

    def _ror_accumulator(self, mode: AddressingMode) -> None:
        self.register_a = self._shift_right(self.register_a, flags.get_carry(self.status))

    def _ror(self, mode: AddressingMode) -> None:
        carry = flags.get_carry(self.status)
        self._modify_memory(mode, lambda v: self._shift_right(v, carry))

    # Bitwise and arithmetic

    def _and(self, mode: AddressingMode) -> None:
        self.register_a &= self._read_operand(mode)
        self._update_zero_and_negative(self.register_a)

    def _ora(self, mode: AddressingMode) -> None:
        self.register_a |= self._read_operand(mode)
        self._update_zero_and_negative(self.register_a)

    def _eor(self, mode: AddressingMode) -> None:
        self.register_a ^= self._read_operand(mode)
        self._update_zero_and_negative(self.register_a)

    def _bit(self, mode: AddressingMode) -> None:
        data = self._read_operand(mode)
        self._update_flag((self.register_a & data) == 0, flags.set_zero, flags.unset_zero)
        self.status |= data & 0b1100_0000

    def _compare(self, mode: AddressingMode, compare_with: int) -> None:
        data = self._read_operand(mode)
        self._update_carry(data <= compare_with)
        self._update_zero_and_negative((compare_with - data) & 0xFF)

    def _add_with_carry(self, mode: AddressingMode, subtract: bool) -> None:
        data = self._read_operand(mode)
        if subtract:
            data ^= 0xFF
        total = self.register_a + data + flags.get_carry(self.status)
        result = total & 0xFF
        overflow = bool((self.register_a ^ result) & (data ^ result) & 0x80)
        self.register_a = result
        self._update_zero_and_negative(result)
        self._update_flag(overflow, flags.set_overflow, flags.unset_overflow)
        self._update_carry(total > 0xFF)

    # Jumps and branches

    def _branch(self, taken: bool) -> None:
        if not taken:
            return
        offset = self.mem_read(self.program_counter)
        signed = offset - 0x100 if offset & 0x80 else offset
        self.program_counter = (((self.program_counter + signed) & 0xFFFF) + 1) & 0xFFFF

    def _jmp(self, mode: AddressingMode) -> None:
        self.program_counter = self._operand_address(mode)

    def _jsr(self, mode: AddressingMode) -> None:
        target = self._operand_address(mode)
        self.push_stack_u16((self.program_counter + 1) & 0xFFFF)
        self.program_counter = target

    def _rts(self, mode: AddressingMode) -> None:
        self.program_counter = (self.pop_stack_u16() + 1) & 0xFFFF

    def _pla(self, mode: AddressingMode) -> None:
        self.register_a = self.pop_stack()
        self._update_zero_and_negative(self.register_a)