# nes6502

A small emulator of the 6502 processor found in the NES. It runs machine
code held in a flat, zero-filled block of `0xFFFF` bytes and stops at the
first `BRK` instruction.

## Installation

```
pip install .
```

## Usage

```python
from nes6502.cpu import CPU

cpu = CPU()
# LDA #$c0; TAX; INX; BRK
cpu.load_and_run([0xA9, 0xC0, 0xAA, 0xE8, 0x00])
assert cpu.register_x == 0xC1
```

`CPU.load` copies a program to `0x8000` and sets the reset vector at
`0xFFFC` to point there. `reset` clears A, X, Y and the status byte, sets
the stack pointer to `0xFF` and loads the program counter from the reset
vector. `load_and_run` loads, resets and runs.

`load_and_run_no_reset` keeps the registers and status you set beforehand
and only takes the program counter from the reset vector, so you can
prepare a state and then run from it:

```python
cpu = CPU()
cpu.register_a = 1
cpu.status = 1          # carry set
cpu.load_and_run_no_reset([0x69, 0x01, 0x00])   # ADC #$01; BRK
assert cpu.register_a == 3
```

The CPU exposes `register_a`, `register_x`, `register_y`, `status`,
`stack_pointer`, `program_counter` and `memory` as plain attributes.

### Memory

`CPU.mem_read`, `mem_write`, `mem_read_u16` and `mem_write_u16` read and
write bytes and little-endian 16-bit words. They go through
`nes6502.memory.Memory`, which also offers `read`, `write`, `read_u16`,
`write_u16` and `load(start, data)`. An address outside memory raises
`IndexError`; a value that does not fit in a byte (or, for the 16-bit
writes, in 16 bits) raises `ValueError`.

### Stack

The stack sits in page `0x01` and is used through `push_stack`,
`pop_stack`, `push_stack_u16` and `pop_stack_u16`. A push or pop that would
move the stack pointer below `0x00` or above `0xFF` raises `OverflowError`.

### Flags and opcodes

`nes6502.flags` holds helpers for the status byte: `is_zero_set`,
`is_carry_set`, `is_negative_set`, `is_overflow_set`, `get_carry`,
`is_negative`, and `set_*` / `unset_*` functions for carry, zero,
interrupt-disable, decimal, overflow and negative. Since the status is an
`int`, the `set_*` and `unset_*` functions return the new value.

`nes6502.opcodes` holds the instruction table (`CPU_OPS_CODES` and
`OPCODES_MAP`), the `AddressingMode` enum and the `OpCode` dataclass with
`code`, `mnemonic`, `length`, `cycles` and `mode`. `lookup(code)` returns an
`OpCode` or raises `UnknownOpcodeError`; `CPU.run` raises the same error
when it meets a byte that is not in the table. Asking for an operand
address in a mode that has none raises
`nes6502.cpu.UnsupportedAddressingModeError`.

Each executed instruction is logged at DEBUG level on the `nes6502.cpu`
logger.

## Supported instructions

Loads and stores (LDA, LDX, LDY, STA, STX, STY), register transfers and
increments (TAX, TXA, TAY, TYA, INX, DEX, INY, DEY), shifts and rotates
(ASL, LSR, ROL, ROR, on the accumulator and on memory), bitwise operations
(AND, ORA, EOR, BIT), comparisons (CMP, CPX, CPY), flag instructions (SEC,
SED, SEI, CLC, CLD, CLI, CLV), ADC and SBC, the conditional branches (BNE,
BEQ, BCC, BCS, BMI, BPL, BVC, BVS), JMP (absolute and indirect), JSR, RTS,
PHA, PLA, NOP and BRK.

Some behaviour follows this instruction table rather than real hardware:

- DEY sets Y to X minus one.
- ROR absolute is opcode `0xE6`.
- Several CMP opcodes carry the Immediate, ZeroPage or Absolute mode in
  place of the usual indexed and indirect ones.
- BRK simply stops `run`; it does not push anything or jump.

## What this package does not do

It is a CPU core only. There is no cartridge or ROM file loading, no
picture or sound hardware, no controller input, no interrupts, and no
command-line program. Cycle counts are kept in the opcode table but are not
used to time execution. Instructions not listed above (for example INC,
DEC, PHP, PLP, RTI, TSX, TXS) are not in the table and raise
`UnknownOpcodeError`.

## Running the tests

```
pip install .[test]
pytest
```