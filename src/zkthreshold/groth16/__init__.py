"""
Groth16 proof system
"""

from .package import ProofPackage, ProofPackageLite, ProofPackagePrepared
from .prepared import (
    Groth16VerifierPrepared,
    Groth16VerifyingKeyPrepared,
    alt_bn128_pairing,
    build_verifier,
    build_verifier_from_native,
)
from .prover import (
    Prover,
    generate_proof_package,
    prove,
    validate_proving_key,
    validate_public_input,
)
from .serialization import (
    PreparedVerifyingKey,
    Proof,
    ProvingKey,
    VerifyingKey,
    prepare_verifying_key,
)
from .setup import Setup, load_keys, setup
from .verifier import (
    Verifier,
    prepare_inputs,
    verify,
    verify_proof_package,
    verify_with_inputs,
)
