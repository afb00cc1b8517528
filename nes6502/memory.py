"""Flat byte-addressed memory for the CPU."""

from collections.abc import Iterable

MEMORY_SIZE = 0xFFFF


class Memory:
    """A zero-filled block of ``MEMORY_SIZE`` bytes.

    Addresses outside the block raise IndexError; values that do not fit in
    a byte raise ValueError.
    """

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        self._cells = bytearray(size)

    def __len__(self) -> int:
        return len(self._cells)

    def _check(self, addr: int) -> None:
        if not 0 <= addr < len(self._cells):
            raise IndexError(f"address {addr:#X} is outside memory")

    def read(self, addr: int) -> int:
        """Return the byte stored at ``addr``."""
        self._check(addr)
        return self._cells[addr]

    def write(self, addr: int, data: int) -> None:
        """Store the byte ``data`` at ``addr``."""
        self._check(addr)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"value {data!r} does not fit in a byte")
        self._cells[addr] = data

    def read_u16(self, pos: int) -> int:
        """Return the little-endian 16-bit word stored at ``pos``."""
        lo = self.read(pos)
        hi = self.read(pos + 1)
        return (hi << 8) | lo

    def write_u16(self, pos: int, data: int) -> None:
        """Store ``data`` as a little-endian 16-bit word at ``pos``."""
        if not 0 <= data <= 0xFFFF:
            raise ValueError(f"value {data!r} does not fit in 16 bits")
        self._check(pos)
        self._check(pos + 1)
        self.write(pos, data & 0xFF)
        self.write(pos + 1, data >> 8)

    def load(self, start: int, data: Iterable[int]) -> None:
        """Copy ``data`` into memory beginning at ``start``."""
        chunk = bytes(data)
        end = start + len(chunk)
        if start < 0 or end > len(self._cells):
            raise IndexError(
                f"{len(chunk)} bytes at {start:#X} do not fit in memory"
            )
        self._cells[start:end] = chunk