"""
Conversion between field elements and fixed-width byte buffers,
and between the library point encoding and the alt_bn128 (EIP-197) layout
"""

from .constant import (
    BN254_SCALAR_FIELD,
    FIELD_ELEMENT_SIZE,
    G1_POINT_SIZE,
    G2_POINT_SIZE,
)
from .errors import DeserializationError, EndiannessError


def field_to_bytes(f: int) -> bytes:
    """Serialize field element into 32 bytes little-endian"""
    return int(f % BN254_SCALAR_FIELD).to_bytes(FIELD_ELEMENT_SIZE, "little")


def bytes_to_field(b: bytes) -> int:
    """
    Deserialize 32 bytes little-endian into field element.
    Non-canonical encoding (value >= modulus) is rejected.
    """
    if len(b) != FIELD_ELEMENT_SIZE:
        raise DeserializationError(
            f"Field element must be {FIELD_ELEMENT_SIZE} bytes, got {len(b)}"
        )

    f = int.from_bytes(b, "little")
    if f >= BN254_SCALAR_FIELD:
        raise DeserializationError("Input exceeds field characteristic")

    return f


def convert_endianness(data: bytes, chunk_size: int = 4, output_size: int = None):
    """
    Reverse byte order inside every `chunk_size` chunk of `data`,
    4-byte words by default.

    With `chunk_size=32` a G1 point `x || y` switches between little
    and big endian coordinates; with `chunk_size=64` a G2 point
    `x.c0 || x.c1 || y.c0 || y.c1` (little endian) becomes
    `x.c1 || x.c0 || y.c1 || y.c0` (big endian) and vice versa.
    """
    if len(data) % 4 != 0:
        raise EndiannessError(f"Buffer size must be a multiple of 4, got {len(data)}")

    if chunk_size <= 0 or chunk_size % 4 != 0:
        raise EndiannessError(f"Chunk size must be a multiple of 4, got {chunk_size}")

    if len(data) % chunk_size != 0:
        raise EndiannessError(
            f"Buffer size {len(data)} is not divisible into {chunk_size}-byte chunks"
        )

    if output_size is not None and output_size != len(data):
        raise EndiannessError(
            f"Output size {output_size} differs from input size {len(data)}"
        )

    out = bytearray()
    for i in range(0, len(data), chunk_size):
        out += data[i : i + chunk_size][::-1]

    return bytes(out)


def g1_to_be(data: bytes) -> bytes:
    """Convert uncompressed G1 point between library and alt_bn128 layout"""
    return convert_endianness(data, FIELD_ELEMENT_SIZE, G1_POINT_SIZE)


def g2_to_be(data: bytes) -> bytes:
    """Convert uncompressed G2 point between library and alt_bn128 layout"""
    return convert_endianness(data, FIELD_ELEMENT_SIZE * 2, G2_POINT_SIZE)
