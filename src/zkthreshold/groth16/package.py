"""
Proof packages returned by a single proving call.

`ProofPackage` holds the native objects, while `ProofPackageLite` and
`ProofPackagePrepared` hold serialized bytes and have a Borsh transport
encoding: every byte vector is prefixed with its u32 little-endian length
and raw public inputs are fixed 32-byte arrays.
"""

from ..constant import FIELD_ELEMENT_SIZE
from ..ecc import CurvePoint
from ..errors import DeserializationError
from .serialization import PreparedVerifyingKey, Proof


def _write_bytes(b: bytes) -> bytes:
    return int.to_bytes(len(b), 4, "little") + bytes(b)


def _read_bytes(data: bytes, offset: int):
    if len(data) < offset + 4:
        raise DeserializationError("Truncated length header")

    n = int.from_bytes(data[offset : offset + 4], "little")
    offset += 4

    if len(data) < offset + n:
        raise DeserializationError(f"Expected {n} bytes at offset {offset}")

    return data[offset : offset + n], offset + n


def _ensure_consumed(data: bytes, offset: int):
    if offset != len(data):
        raise DeserializationError(f"{len(data) - offset} trailing bytes in package")


class ProofPackage:
    """
    Native proof package

    Args:
        proof: `Proof`
        public_inputs: prepared public input point `ic[0] + sum(x_i * ic[i+1])`
        prepared_verifying_key: `PreparedVerifyingKey`
    """

    def __init__(self, proof: Proof, public_inputs: CurvePoint, prepared_verifying_key):
        self.proof = proof
        self.public_inputs = public_inputs
        self.prepared_verifying_key = prepared_verifying_key


class ProofPackageLite:
    """Serialized proof with the raw 32-byte public inputs"""

    def __init__(self, proof: bytes, public_inputs: list, verifying_key: bytes):
        self.proof = proof
        self.public_inputs = public_inputs
        self.verifying_key = verifying_key

    def to_bytes(self) -> bytes:
        s = _write_bytes(self.proof)
        s += int.to_bytes(len(self.public_inputs), 4, "little")
        for x in self.public_inputs:
            if len(x) != FIELD_ELEMENT_SIZE:
                raise DeserializationError(
                    f"Public input must be {FIELD_ELEMENT_SIZE} bytes, got {len(x)}"
                )
            s += bytes(x)
        s += _write_bytes(self.verifying_key)
        return s

    @classmethod
    def from_bytes(cls, data: bytes):
        data = bytes(data)
        proof, offset = _read_bytes(data, 0)

        if len(data) < offset + 4:
            raise DeserializationError("Truncated length header")
        n = int.from_bytes(data[offset : offset + 4], "little")
        offset += 4

        public_inputs = []
        for _ in range(n):
            if len(data) < offset + FIELD_ELEMENT_SIZE:
                raise DeserializationError("Truncated public input")
            public_inputs.append(data[offset : offset + FIELD_ELEMENT_SIZE])
            offset += FIELD_ELEMENT_SIZE

        verifying_key, offset = _read_bytes(data, offset)
        _ensure_consumed(data, offset)

        return cls(proof, public_inputs, verifying_key)


class ProofPackagePrepared:
    """Serialized proof with the serialized prepared public input point"""

    def __init__(self, proof: bytes, public_inputs: bytes, verifying_key: bytes):
        self.proof = proof
        self.public_inputs = public_inputs
        self.verifying_key = verifying_key

    def to_bytes(self) -> bytes:
        return (
            _write_bytes(self.proof)
            + _write_bytes(self.public_inputs)
            + _write_bytes(self.verifying_key)
        )

    @classmethod
    def from_bytes(cls, data: bytes):
        data = bytes(data)
        proof, offset = _read_bytes(data, 0)
        public_inputs, offset = _read_bytes(data, offset)
        verifying_key, offset = _read_bytes(data, offset)
        _ensure_consumed(data, offset)

        return cls(proof, public_inputs, verifying_key)

    def to_native(self, crv="BN254") -> ProofPackage:
        """Parse every serialized field back into a native `ProofPackage`"""
        return ProofPackage(
            Proof.from_bytes(self.proof, crv),
            CurvePoint.from_bytes(self.public_inputs, crv),
            PreparedVerifyingKey.from_bytes(self.verifying_key, crv),
        )
