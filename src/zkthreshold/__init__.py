"""
Zero-knowledge threshold proofs: prove `A >= B` over BN254 with Groth16
"""

import logging

from .circuit import InequalityCircuit, PublicInequalityCircuit, TokenVerificationCircuit
from .codec import bytes_to_field, convert_endianness, field_to_bytes

logging.getLogger(__name__).addHandler(logging.NullHandler())
