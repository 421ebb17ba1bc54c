"""Exception types raised across the proving pipeline"""


class ZKThresholdError(ValueError):
    """Base class of every typed failure in this package"""

    default_message = ""

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message or self.__class__.__name__)


# field / encoding


class FieldCodecError(ZKThresholdError):
    pass


class DeserializationError(FieldCodecError):
    default_message = "Bytes do not encode a canonical element"


class EndiannessError(FieldCodecError):
    default_message = "Invalid buffer size for endianness conversion"


# circuit construction


class CircuitError(ZKThresholdError):
    pass


class MissingAssignment(CircuitError):
    default_message = "Missing assignment"


class InvalidRange(CircuitError):
    default_message = "Invalid value range"


# constraint synthesis


class SynthesisError(ZKThresholdError):
    pass


class AssignmentMissing(SynthesisError):
    default_message = "Value requested for an unassigned variable"


class UnsatisfiedConstraint(SynthesisError):
    def __init__(self, name: str):
        self.constraint = name
        super().__init__(f"Constraint `{name}` is not satisfied by the witness")


# proving


class ProofError(ZKThresholdError):
    pass


class VerificationError(ZKThresholdError):
    pass


class InvalidPublicInput(ProofError, VerificationError):
    """
    Public input rejected, either as raw bytes before proving
    or as a prepared input point before verification
    """

    default_message = "Invalid public input"


class InvalidProvingKey(ProofError):
    default_message = "Invalid proving key"


class CircuitValidationFailed(ProofError):
    default_message = "Circuit validation failed"


class ProofGenerationFailed(ProofError):
    default_message = "Proof generation failed"


# verification


class InvalidProof(VerificationError):
    default_message = "Invalid proof format"


class VerificationFailed(VerificationError):
    default_message = "Verification failed"


# prepared verifier


class Groth16Error(ZKThresholdError):
    pass


class IncompatibleVerifyingKeyWithNrPublicInputs(Groth16Error):
    default_message = "Incompatible Verifying Key with number of public inputs"


class InvalidG1Length(Groth16Error):
    default_message = "InvalidG1Length"


class InvalidG2Length(Groth16Error):
    default_message = "InvalidG2Length"


class InvalidPublicInputsLength(Groth16Error):
    default_message = "InvalidPublicInputsLength"


class PairingVerificationError(Groth16Error):
    default_message = "PairingVerificationError"
