"""Trusted setup module of Groth16 protocol"""

import logging
import os

from ..circuit import InequalityCircuit
from ..ecc import EllipticCurve
from ..polynomial import (
    evaluate_lagrange_coefficients,
    evaluate_vanishing_polynomial,
)
from ..qap import QAP
from ..utils import get_key_dir, get_random_int
from .serialization import ProvingKey, VerifyingKey

logger = logging.getLogger(__name__)

PROVING_KEY_FILE = "pk.bin"
VERIFYING_KEY_FILE = "vk.bin"


class Setup:

    def __init__(self, qap: QAP, curve: str = "BN254"):
        """
        Trusted setup object

        Args:
            qap: QAP to be set up from
            curve: `BN254`
        """
        self.qap = qap
        self.E = EllipticCurve(curve)
        self.order = self.E.order

    def generate(self) -> tuple[ProvingKey, VerifyingKey]:
        """Generate `ProvingKey` and `VerifyingKey`"""

        G1 = self.E.G1()
        G2 = self.E.G2()
        o = self.order

        # generate random toxic waste
        tau = get_random_int(o - 1)
        alpha = get_random_int(o - 1)
        beta = get_random_int(o - 1)
        gamma = get_random_int(o - 1)
        delta = get_random_int(o - 1)

        inv_gamma = pow(gamma, -1, o)
        inv_delta = pow(delta, -1, o)

        alpha_G1 = G1 * alpha
        beta_G1 = G1 * beta
        beta_G2 = G2 * beta
        gamma_G2 = G2 * gamma
        delta_G1 = G1 * delta
        delta_G2 = G2 * delta

        domain = self.qap.domain
        n_public = self.qap.n_public

        logger.debug(
            "Running setup over domain %d with %d variables (%d public)",
            domain,
            self.qap.n_variables,
            n_public,
        )

        # u_i(tau), v_i(tau), w_i(tau) for every variable
        lagrange_coeffs = evaluate_lagrange_coefficients(domain, tau, o)
        U = self.qap.a.column_dot(lagrange_coeffs)
        V = self.qap.b.column_dot(lagrange_coeffs)
        W = self.qap.c.column_dot(lagrange_coeffs)

        K = [(beta * u + alpha * v + w) % o for u, v, w in zip(U, V, W)]

        a_query = self.E.batch_mul(G1, U)
        b1_query = self.E.batch_mul(G1, V)
        b2_query = self.E.batch_mul(G2, V)

        # H has degree at most domain - 2
        t = evaluate_vanishing_polynomial(domain, tau, o)
        t_div_delta = t * inv_delta % o
        h_scalars = []
        power = 1
        for _ in range(domain - 1):
            h_scalars.append(power * t_div_delta % o)
            power = power * tau % o
        h_query = self.E.batch_mul(G1, h_scalars)

        ic = self.E.batch_mul(G1, [k * inv_gamma % o for k in K[:n_public]])
        l_query = self.E.batch_mul(G1, [k * inv_delta % o for k in K[n_public:]])

        vkey = VerifyingKey(alpha_G1, beta_G2, gamma_G2, delta_G2, ic)
        pkey = ProvingKey(
            vkey,
            beta_G1,
            delta_G1,
            a_query,
            b1_query,
            b2_query,
            h_query,
            l_query,
        )

        return pkey, vkey


def setup(circuit: InequalityCircuit, save_keys=False, key_dir=None, curve="BN254"):
    """
    Run circuit-specific trusted setup

    Args:
        circuit: circuit whose shape is used, assigned values are ignored
        save_keys: write `pk.bin` and `vk.bin` into `key_dir`
        key_dir: target directory, defaults to `ZKTHRESHOLD_KEY_DIR` or cwd

    Return:
        (ProvingKey, VerifyingKey)
    """
    cs = circuit.constraint_system(setup_mode=True)

    qap = QAP(EllipticCurve(curve).order)
    qap.from_r1cs(cs)

    pkey, vkey = Setup(qap, curve).generate()

    logger.info(
        "Generated keys for %s with %d constraints and %d public inputs",
        circuit.__class__.__name__,
        cs.num_constraints(),
        vkey.n_public,
    )

    if save_keys:
        save_keys_to(pkey, vkey, key_dir)

    return pkey, vkey


def save_keys_to(pkey: ProvingKey, vkey: VerifyingKey, key_dir=None):
    """Write serialized keys into `key_dir`"""
    key_dir = key_dir or get_key_dir()
    os.makedirs(key_dir, exist_ok=True)

    with open(os.path.join(key_dir, PROVING_KEY_FILE), "wb") as f:
        f.write(pkey.to_bytes())

    with open(os.path.join(key_dir, VERIFYING_KEY_FILE), "wb") as f:
        f.write(vkey.to_bytes())

    logger.info("Saved keys into %s", key_dir)


def load_keys(key_dir=None, curve="BN254"):
    """Read keys written by `setup(..., save_keys=True)`"""
    key_dir = key_dir or get_key_dir()

    with open(os.path.join(key_dir, PROVING_KEY_FILE), "rb") as f:
        pkey = ProvingKey.from_bytes(f.read(), curve)

    with open(os.path.join(key_dir, VERIFYING_KEY_FILE), "rb") as f:
        vkey = VerifyingKey.from_bytes(f.read(), curve)

    logger.debug("Loaded keys from %s", key_dir)

    return pkey, vkey
