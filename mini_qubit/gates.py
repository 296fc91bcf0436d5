# mini_qubit/gates.py
import numpy as np
from dataclasses import dataclass
from .state import Qubit, complex_dtype, real_dtype, DEFAULT_TOL

# ---------- 2x2 matrix builders ----------

def X(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, 1],
                     [1, 0]], dtype=complex_dtype(dtype))

def Y(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, -1j],
                     [1j, 0]], dtype=complex_dtype(dtype))

def Z(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, -1]], dtype=complex_dtype(dtype))

def H(dtype=np.complex128) -> np.ndarray:
    f = real_dtype(dtype).type
    c = f(1) / np.sqrt(f(2))
    return np.array([[c, c],
                     [c, -c]], dtype=complex_dtype(dtype))

def RX(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return np.array([[c, s],
                     [s, c]], dtype=complex_dtype(dtype))

def RY(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = np.sin(theta/2.0)
    return np.array([[c, -s],
                     [s, c]], dtype=complex_dtype(dtype))

def RZ(theta: float, dtype=np.complex128) -> np.ndarray:
    return np.array([[np.exp(-0.5j*theta), 0],
                     [0, np.exp(+0.5j*theta)]], dtype=complex_dtype(dtype))

# ---------- gate object ----------

@dataclass(frozen=True, eq=False)
class QuGate:
    """A 2x2 operator acting on a Qubit. Unitarity is not checked."""
    U: np.ndarray  # shape (2,2), read-only

    def __post_init__(self):
        U = np.array(self.U)
        if not np.iscomplexobj(U):
            U = U.astype(np.result_type(U.dtype, np.complex64))
        complex_dtype(U.dtype)
        if U.shape != (2, 2):
            raise ValueError(f"Gate matrix must have shape (2,2), got {U.shape}")
        U.setflags(write=False)
        object.__setattr__(self, "U", U)

    @staticmethod
    def new(matrix, dtype=None) -> "QuGate":
        if dtype is not None:
            return QuGate(np.asarray(matrix, dtype=complex_dtype(dtype)))
        return QuGate(matrix)

    @staticmethod
    def pauli_x(dtype=np.complex128) -> "QuGate":
        return QuGate(X(dtype))

    @staticmethod
    def pauli_y(dtype=np.complex128) -> "QuGate":
        return QuGate(Y(dtype))

    @staticmethod
    def pauli_z(dtype=np.complex128) -> "QuGate":
        return QuGate(Z(dtype))

    @staticmethod
    def hadamard(dtype=np.complex128) -> "QuGate":
        return QuGate(H(dtype))

    @staticmethod
    def rx(theta: float, dtype=np.complex128) -> "QuGate":
        return QuGate(RX(theta, dtype))

    @staticmethod
    def ry(theta: float, dtype=np.complex128) -> "QuGate":
        return QuGate(RY(theta, dtype))

    @staticmethod
    def rz(theta: float, dtype=np.complex128) -> "QuGate":
        return QuGate(RZ(theta, dtype))

    @property
    def dtype(self):
        return self.U.dtype

    def matrix(self) -> np.ndarray:
        return self.U

    def apply(self, state: Qubit, backend: str = "serial") -> Qubit:
        """Return a new Qubit holding U @ psi. Inputs are left untouched."""
        if backend == "serial":
            from .apply_serial import apply_single_qubit
        elif backend == "numba":
            try:
                from .apply_numba import apply_single_qubit
            except ImportError as e:
                raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        else:
            raise NotImplementedError(f"Unknown backend: {backend}")
        return Qubit(apply_single_qubit(state.get_state(), self.U.astype(state.dtype)))

    def dagger(self) -> "QuGate":
        return QuGate(self.U.conj().T)

    def is_unitary(self, tol=None) -> bool:
        if tol is None:
            tol = DEFAULT_TOL[self.dtype.type]
        prod = self.U.conj().T @ self.U
        return bool(np.allclose(prod, np.eye(2), atol=tol, rtol=0))

    def __eq__(self, other):
        if not isinstance(other, QuGate):
            return NotImplemented
        return bool(np.array_equal(self.U, other.U))

    __hash__ = None
