"""Bit pattern helpers for the shifting LED."""

WIDTH = 8
MASK = 0xFF


def rotate_left(value: int, count: int = 1) -> int:
    """Rotate an 8-bit value left; bit 7 wraps round to bit 0."""
    count %= WIDTH
    return ((value << count) | (value >> (WIDTH - count))) & MASK


def rotate_right(value: int, count: int = 1) -> int:
    """Rotate an 8-bit value right; bit 0 wraps round to bit 7."""
    count %= WIDTH
    return ((value >> count) | (value << (WIDTH - count))) & MASK


def popcount(value: int) -> int:
    return bin(value & MASK).count("1")


def render_byte(value: int) -> str:
    """Format a byte as two nibbles, MSB first, e.g. 0x01 -> "0000 0001 "."""
    bits = f"{value & MASK:08b}"
    return f"{bits[:4]} {bits[4:]} "
