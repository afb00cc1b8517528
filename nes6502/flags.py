"""Helpers for reading and changing the 6502 processor status byte.

The status byte is an immutable ``int``, so every ``set_*`` and ``unset_*``
helper returns the updated value.
"""

CARRY = 0b0000_0001
ZERO = 0b0000_0010
INTERRUPT_DISABLE = 0b0000_0100
DECIMAL = 0b0000_1000
OVERFLOW = 0b0100_0000
NEGATIVE = 0b1000_0000

_BYTE = 0xFF


def _set(flags: int, bit: int) -> int:
    return (flags | bit) & _BYTE


def _unset(flags: int, bit: int) -> int:
    return flags & ~bit & _BYTE


def is_zero_set(flags: int) -> bool:
    """Return True if the zero flag is set."""
    return bool(flags & ZERO)


def is_carry_set(flags: int) -> bool:
    """Return True if the carry flag is set."""
    return bool(flags & CARRY)


def is_negative_set(flags: int) -> bool:
    """Return True if the negative flag is set."""
    return bool(flags & NEGATIVE)


def is_overflow_set(flags: int) -> bool:
    """Return True if the overflow flag is set."""
    return bool(flags & OVERFLOW)


def get_carry(flags: int) -> int:
    """Return the carry flag as 0 or 1."""
    return flags & CARRY


def set_carry(flags: int) -> int:
    return _set(flags, CARRY)


def set_zero(flags: int) -> int:
    return _set(flags, ZERO)


def set_interrupt_disable(flags: int) -> int:
    return _set(flags, INTERRUPT_DISABLE)


def set_decimal(flags: int) -> int:
    return _set(flags, DECIMAL)


def set_overflow(flags: int) -> int:
    return _set(flags, OVERFLOW)


def set_negative(flags: int) -> int:
    return _set(flags, NEGATIVE)


def unset_carry(flags: int) -> int:
    return _unset(flags, CARRY)


def unset_zero(flags: int) -> int:
    return _unset(flags, ZERO)


def unset_interrupt_disable(flags: int) -> int:
    return _unset(flags, INTERRUPT_DISABLE)


def unset_decimal(flags: int) -> int:
    return _unset(flags, DECIMAL)


def unset_overflow(flags: int) -> int:
    return _unset(flags, OVERFLOW)


def unset_negative(flags: int) -> int:
    return _unset(flags, NEGATIVE)


def is_negative(x: int) -> bool:
    """Return True if bit 7 of the byte ``x`` is set."""
    return bool(x & NEGATIVE)