BN254_MODULUS = 0x30644E72E131A029B85045B68181585D97816A916871CA8D3C208C16D87CFD47
BN254_SCALAR_FIELD = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

# multiplicative generator of the BN254 scalar field
BN254_SCALAR_GENERATOR = 5

FIELD_ELEMENT_SIZE = 32
G1_POINT_SIZE = 64
G2_POINT_SIZE = 128
GT_ELEMENT_SIZE = 12 * FIELD_ELEMENT_SIZE

# one (G1, G2) pair of the alt_bn128 pairing input
PAIRING_ELEMENT_SIZE = G1_POINT_SIZE + G2_POINT_SIZE

RANGE_BITS = 32
RANGE_BOUND = 1 << RANGE_BITS

MAX_PUBLIC_INPUTS = 10
