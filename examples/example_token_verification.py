"""
Prove that the amount of tokens available to send is at least the requested amount
without revealing the available amount, then check the proof through the
alt_bn128 pairing buffer
"""

from zkthreshold import TokenVerificationCircuit
from zkthreshold.errors import ProofGenerationFailed
from zkthreshold.groth16 import build_verifier, generate_proof_package, setup

pk, vk = setup(TokenVerificationCircuit())

# secret amount
tokens_to_send = 1000
tokens_asked = 500

circuit = TokenVerificationCircuit(tokens_to_send, tokens_asked)
_, prepared, _ = generate_proof_package(pk, vk, circuit, circuit.public_inputs())

verifier = build_verifier(prepared)
ok, recorded = verifier.verify_and_record()
assert ok
print(f"Proof is valid: hidden amount covers {tokens_asked} tokens")
print(f"Pairing input: {len(verifier.pairing_input())} bytes")
print(f"Recorded prepared input: {recorded.hex()}")

# not enough tokens
circuit = TokenVerificationCircuit(400, tokens_asked)
try:
    generate_proof_package(pk, vk, circuit, circuit.public_inputs())
except ProofGenerationFailed:
    print(f"Proof cannot be generated: hidden amount does not cover {tokens_asked} tokens")
