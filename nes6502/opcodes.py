"""The 6502 instruction table and addressing modes."""

from dataclasses import dataclass
from enum import Enum, auto


class AddressingMode(Enum):
    """How an instruction finds its operand."""

    IMMEDIATE = auto()
    ZERO_PAGE = auto()
    ZERO_PAGE_X = auto()
    ZERO_PAGE_Y = auto()
    ABSOLUTE = auto()
    ABSOLUTE_X = auto()
    ABSOLUTE_Y = auto()
    INDIRECT = auto()
    INDIRECT_X = auto()
    INDIRECT_Y = auto()
    NONE = auto()


class UnknownOpcodeError(LookupError):
    """Raised when a byte does not name a known instruction."""

    def __init__(self, code: int) -> None:
        super().__init__(f"OpCode {code:x} is not recognized")
        self.code = code


@dataclass(frozen=True)
class OpCode:
    """One entry of the instruction table."""

    code: int
    mnemonic: str
    length: int
    cycles: int
    mode: AddressingMode


_M = AddressingMode

CPU_OPS_CODES: tuple[OpCode, ...] = tuple(
    OpCode(*entry)
    for entry in (
        (0x00, "BRK", 1, 7, _M.NONE),
        (0xEA, "NOP", 1, 2, _M.NONE),
        # Register instructions
        (0xAA, "TAX", 1, 2, _M.NONE),
        (0x8A, "TXA", 1, 2, _M.NONE),
        (0xCA, "DEX", 1, 2, _M.NONE),
        (0xE8, "INX", 1, 2, _M.NONE),
        (0xA8, "TAY", 1, 2, _M.NONE),
        (0x98, "TYA", 1, 2, _M.NONE),
        (0x88, "DEY", 1, 2, _M.NONE),
        (0xC8, "INY", 1, 2, _M.NONE),
        # Loads
        (0xA9, "LDA", 2, 2, _M.IMMEDIATE),
        (0xA5, "LDA", 2, 3, _M.ZERO_PAGE),
        (0xB5, "LDA", 2, 4, _M.ZERO_PAGE_X),
        (0xAD, "LDA", 3, 4, _M.ABSOLUTE),
        (0xBD, "LDA", 3, 4, _M.ABSOLUTE_X),
        (0xB9, "LDA", 3, 4, _M.ABSOLUTE_Y),
        (0xA1, "LDA", 2, 6, _M.INDIRECT_X),
        (0xB1, "LDA", 2, 5, _M.INDIRECT_Y),
        (0xA2, "LDX", 2, 2, _M.IMMEDIATE),
        (0xA6, "LDX", 2, 3, _M.ZERO_PAGE),
        (0xB6, "LDX", 2, 4, _M.ZERO_PAGE_Y),
        (0xAE, "LDX", 3, 4, _M.ABSOLUTE),
        (0xBE, "LDX", 3, 4, _M.ABSOLUTE_Y),
        (0xA0, "LDY", 2, 2, _M.IMMEDIATE),
        (0xA4, "LDY", 2, 3, _M.ZERO_PAGE),
        (0xB4, "LDY", 2, 4, _M.ZERO_PAGE_X),
        (0xAC, "LDY", 3, 4, _M.ABSOLUTE),
        (0xBC, "LDY", 3, 4, _M.ABSOLUTE_X),
        # Stores
        (0x85, "STA", 2, 3, _M.ZERO_PAGE),
        (0x95, "STA", 2, 4, _M.ZERO_PAGE_X),
        (0x8D, "STA", 3, 4, _M.ABSOLUTE),
        (0x9D, "STA", 3, 5, _M.ABSOLUTE_X),
        (0x99, "STA", 3, 5, _M.ABSOLUTE_Y),
        (0x81, "STA", 2, 6, _M.INDIRECT_X),
        (0x91, "STA", 2, 6, _M.INDIRECT_Y),
        (0x86, "STX", 2, 3, _M.ZERO_PAGE),
        (0x96, "STX", 2, 4, _M.ZERO_PAGE_Y),
        (0x8E, "STX", 3, 4, _M.ABSOLUTE),
        (0x84, "STY", 2, 3, _M.ZERO_PAGE),
        (0x94, "STY", 2, 4, _M.ZERO_PAGE_X),
        (0x8C, "STY", 3, 4, _M.ABSOLUTE),
        # Shifts and rotations
        (0x0A, "ASL_A", 1, 2, _M.NONE),
        (0x06, "ASL", 2, 5, _M.ZERO_PAGE),
        (0x16, "ASL", 2, 6, _M.ZERO_PAGE_X),
        (0x0E, "ASL", 3, 6, _M.ABSOLUTE),
        (0x1E, "ASL", 3, 7, _M.ABSOLUTE_X),
        (0x4A, "LSR_A", 1, 2, _M.NONE),
        (0x46, "LSR", 2, 5, _M.ZERO_PAGE),
        (0x56, "LSR", 2, 6, _M.ZERO_PAGE_X),
        (0x4E, "LSR", 3, 6, _M.ABSOLUTE),
        (0x5E, "LSR", 3, 7, _M.ABSOLUTE_X),
        (0x2A, "ROL_A", 1, 2, _M.NONE),
        (0x26, "ROL", 2, 5, _M.ZERO_PAGE),
        (0x36, "ROL", 2, 6, _M.ZERO_PAGE_X),
        (0x2E, "ROL", 3, 6, _M.ABSOLUTE),
        (0x3E, "ROL", 3, 7, _M.ABSOLUTE_X),
        (0x6A, "ROR_A", 1, 2, _M.NONE),
        (0x66, "ROR", 2, 5, _M.ZERO_PAGE),
        (0x76, "ROR", 2, 6, _M.ZERO_PAGE_X),
        (0xE6, "ROR", 3, 6, _M.ABSOLUTE),
        (0x7E, "ROR", 3, 7, _M.ABSOLUTE_X),
        # Bitwise
        (0x29, "AND", 2, 2, _M.IMMEDIATE),
        (0x25, "AND", 2, 3, _M.ZERO_PAGE),
        (0x35, "AND", 2, 4, _M.ZERO_PAGE_X),
        (0x2D, "AND", 3, 4, _M.ABSOLUTE),
        (0x3D, "AND", 3, 4, _M.ABSOLUTE_X),
        (0x39, "AND", 3, 4, _M.ABSOLUTE_Y),
        (0x21, "AND", 2, 6, _M.INDIRECT_X),
        (0x31, "AND", 2, 5, _M.INDIRECT_Y),
        (0x09, "ORA", 2, 2, _M.IMMEDIATE),
        (0x05, "ORA", 2, 3, _M.ZERO_PAGE),
        (0x15, "ORA", 2, 4, _M.ZERO_PAGE_X),
        (0x0D, "ORA", 3, 4, _M.ABSOLUTE),
        (0x1D, "ORA", 3, 4, _M.ABSOLUTE_X),
        (0x19, "ORA", 3, 4, _M.ABSOLUTE_Y),
        (0x01, "ORA", 2, 6, _M.INDIRECT_X),
        (0x11, "ORA", 2, 5, _M.INDIRECT_Y),
        (0x49, "EOR", 2, 2, _M.IMMEDIATE),
        (0x45, "EOR", 2, 3, _M.ZERO_PAGE),
        (0x55, "EOR", 2, 4, _M.ZERO_PAGE_X),
        (0x4D, "EOR", 3, 4, _M.ABSOLUTE),
        (0x5D, "EOR", 3, 4, _M.ABSOLUTE_X),
        (0x59, "EOR", 3, 4, _M.ABSOLUTE_Y),
        (0x41, "EOR", 2, 6, _M.INDIRECT_X),
        (0x51, "EOR", 2, 5, _M.INDIRECT_Y),
        (0x24, "BIT", 2, 3, _M.ZERO_PAGE),
        (0x2C, "BIT", 3, 4, _M.ABSOLUTE),
        # Comparisons
        (0xC9, "CMP", 2, 2, _M.IMMEDIATE),
        (0xC5, "CMP", 2, 3, _M.ZERO_PAGE),
        (0xD5, "CMP", 2, 4, _M.ABSOLUTE),
        (0xCD, "CMP", 3, 4, _M.IMMEDIATE),
        (0xDD, "CMP", 3, 4, _M.ZERO_PAGE),
        (0xD9, "CMP", 3, 4, _M.ABSOLUTE),
        (0xC1, "CMP", 2, 6, _M.IMMEDIATE),
        (0xD1, "CMP", 2, 5, _M.ZERO_PAGE),
        (0xE0, "CPX", 2, 2, _M.IMMEDIATE),
        (0xE4, "CPX", 3, 3, _M.ZERO_PAGE),
        (0xEC, "CPX", 3, 4, _M.ABSOLUTE),
        (0xC0, "CPY", 2, 2, _M.IMMEDIATE),
        (0xC4, "CPY", 3, 3, _M.ZERO_PAGE),
        (0xCC, "CPY", 3, 4, _M.ABSOLUTE),
        # Flag management
        (0x18, "CLC", 1, 2, _M.NONE),
        (0xD8, "CLD", 1, 2, _M.NONE),
        (0x58, "CLI", 1, 2, _M.NONE),
        (0xB8, "CLV", 1, 2, _M.NONE),
        (0x38, "SEC", 1, 2, _M.NONE),
        (0xF8, "SED", 1, 2, _M.NONE),
        (0x78, "SEI", 1, 2, _M.NONE),
        # Arithmetic
        (0x69, "ADC", 2, 2, _M.IMMEDIATE),
        (0x65, "ADC", 2, 3, _M.ZERO_PAGE),
        (0x75, "ADC", 2, 4, _M.ZERO_PAGE_X),
        (0x6D, "ADC", 3, 4, _M.ABSOLUTE),
        (0x7D, "ADC", 3, 4, _M.ABSOLUTE_X),
        (0x79, "ADC", 3, 4, _M.ABSOLUTE_Y),
        (0x61, "ADC", 2, 6, _M.INDIRECT_X),
        (0x71, "ADC", 2, 5, _M.INDIRECT_Y),
        (0xE9, "SBC", 2, 2, _M.IMMEDIATE),
        (0xE5, "SBC", 2, 3, _M.ZERO_PAGE),
        (0xF5, "SBC", 2, 4, _M.ZERO_PAGE_X),
        (0xED, "SBC", 3, 4, _M.ABSOLUTE),
        (0xFD, "SBC", 3, 4, _M.ABSOLUTE_X),
        (0xF9, "SBC", 3, 4, _M.ABSOLUTE_Y),
        (0xE1, "SBC", 2, 6, _M.INDIRECT_X),
        (0xF1, "SBC", 2, 5, _M.INDIRECT_Y),
        # Branches
        (0xD0, "BNE", 2, 2, _M.NONE),
        (0xF0, "BEQ", 2, 2, _M.NONE),
        (0x90, "BCC", 2, 2, _M.NONE),
        (0xB0, "BCS", 2, 2, _M.NONE),
        (0x30, "BMI", 2, 2, _M.NONE),
        (0x10, "BPL", 2, 2, _M.NONE),
        (0x50, "BVC", 2, 2, _M.NONE),
        (0x70, "BVS", 2, 2, _M.NONE),
        # Jumps
        (0x4C, "JMP", 3, 3, _M.ABSOLUTE),
        (0x6C, "JMP", 3, 5, _M.INDIRECT),
        (0x20, "JSR", 3, 6, _M.ABSOLUTE),
        (0x60, "RTS", 1, 6, _M.NONE),
        # Stack
        (0x48, "PHA", 1, 3, _M.ABSOLUTE),
        (0x68, "PLA", 1, 4, _M.NONE),
    )
)

OPCODES_MAP: dict[int, OpCode] = {op.code: op for op in CPU_OPS_CODES}


def lookup(code: int) -> OpCode:
    """Return the instruction for ``code`` or raise UnknownOpcodeError."""
    try:
        return OPCODES_MAP[code]
    except KeyError:
        raise UnknownOpcodeError(code) from None