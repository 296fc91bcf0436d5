# mini_qubit/state.py
import numpy as np
from dataclasses import dataclass, field

DTYPES = (np.complex64, np.complex128)
DEFAULT_TOL = {np.complex64: 1e-6, np.complex128: 1e-12}


def complex_dtype(dtype) -> np.dtype:
    dt = np.dtype(dtype)
    if dt not in [np.dtype(d) for d in DTYPES]:
        raise ValueError(f"Unsupported dtype {dt}; use complex64 or complex128")
    return dt


def real_dtype(dtype) -> np.dtype:
    """float32 for complex64, float64 for complex128."""
    return np.finfo(complex_dtype(dtype)).dtype


def _basis(index: int, dtype) -> np.ndarray:
    psi = np.zeros(2, dtype=complex_dtype(dtype))
    psi[index] = 1.0 + 0.0j
    return psi


@dataclass(frozen=True, eq=False)
class Qubit:
    psi: np.ndarray = field(default_factory=lambda: _basis(0, np.complex128))  # shape (2,), read-only

    def __post_init__(self):
        psi = np.array(self.psi)
        if not np.iscomplexobj(psi):
            psi = psi.astype(np.result_type(psi.dtype, np.complex64))
        complex_dtype(psi.dtype)
        if psi.shape != (2,):
            raise ValueError(f"Qubit amplitudes must have shape (2,), got {psi.shape}")
        psi.setflags(write=False)
        object.__setattr__(self, "psi", psi)

    # ---------- construction ----------

    @staticmethod
    def new(alpha, beta, dtype=np.complex128) -> "Qubit":
        """Amplitude alpha on |0>, beta on |1>. Not normalized or checked."""
        return Qubit(np.array([alpha, beta], dtype=complex_dtype(dtype)))

    @staticmethod
    def zero(dtype=np.complex128) -> "Qubit":
        return Qubit(_basis(0, dtype))

    @staticmethod
    def one(dtype=np.complex128) -> "Qubit":
        return Qubit(_basis(1, dtype))

    # ---------- queries ----------

    @property
    def dtype(self):
        return self.psi.dtype

    def get_state(self) -> np.ndarray:
        return self.psi

    def alpha(self):
        return self.psi[0]

    def beta(self):
        return self.psi[1]

    def probabilities(self):
        """Born-rule probabilities (|alpha|^2, |beta|^2) in the state's precision."""
        p = self.psi.real * self.psi.real + self.psi.imag * self.psi.imag
        return p[0], p[1]

    def zero_probability(self):
        return self.probabilities()[0]

    def one_probability(self):
        return self.probabilities()[1]

    def validate(self) -> bool:
        """Exact check that the probabilities sum to 1.

        Rounding can make a physically valid state fail this (e.g. H applied
        twice); use is_normalized for a tolerance-based check.
        """
        p0, p1 = self.probabilities()
        return bool(p0 + p1 == real_dtype(self.dtype).type(1))

    def norm2(self) -> float:
        p0, p1 = self.probabilities()
        return float(p0 + p1)

    def is_normalized(self, tol=None) -> bool:
        if tol is None:
            tol = DEFAULT_TOL[self.dtype.type]
        return abs(1.0 - self.norm2()) <= tol

    def check_normalized(self, tol=None):
        if not self.is_normalized(tol):
            raise AssertionError(f"Normalization failed: |alpha|^2+|beta|^2={self.norm2()}")

    # ---------- measurement ----------

    def measure(self, rng=None) -> "Qubit":
        """Collapse to |0> or |1> with the Born-rule probabilities.

        rng is anything with a random() method returning a float in [0, 1),
        e.g. np.random.default_rng(seed). Defaults to numpy's global generator.
        """
        r = np.random.random() if rng is None else rng.random()
        if float(r) < float(self.zero_probability()):
            return Qubit.zero(self.dtype)
        return Qubit.one(self.dtype)

    def sample(self, shots: int, rng=None) -> np.ndarray:
        """Outcomes (0 or 1) of `shots` independent measurements of this state."""
        if shots < 0:
            raise ValueError(f"shots must be non-negative, got {shots}")
        out = np.empty(int(shots), dtype=np.int64)
        for i in range(out.shape[0]):
            out[i] = 0 if self.measure(rng) == Qubit.zero(self.dtype) else 1
        return out

    # ---------- misc ----------

    def copy(self) -> "Qubit":
        return Qubit(self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi.copy()

    def __eq__(self, other):
        if not isinstance(other, Qubit):
            return NotImplemented
        return bool(np.array_equal(self.psi, other.psi))

    __hash__ = None

    def __repr__(self):
        return f"Qubit(alpha={self.psi[0]!r}, beta={self.psi[1]!r}, dtype={self.dtype})"
