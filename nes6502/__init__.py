"""An emulator of the 6502 CPU used in the NES: core, memory, flags and opcode table."""

__version__ = "0.1.0"
__all__ = ["cpu", "flags", "memory", "opcodes"]