# mini_qubit/apply_numba.py
import numpy as np
from numba import njit
from .apply_serial import check_shapes

# ---------- low-level kernel (Numba JIT) ----------

# no fastmath: results must match the serial backend bit-for-bit
@njit(cache=False)
def _single_qubit_kernel(psi, U2, out):
    for r in range(2):
        out[r] = U2[r,0]*psi[0] + U2[r,1]*psi[1]

# ---------- user-facing apply helper ----------

def apply_single_qubit(psi: np.ndarray, U2: np.ndarray) -> np.ndarray:
    check_shapes(psi, U2)
    out = np.empty_like(psi)
    _single_qubit_kernel(psi, np.ascontiguousarray(U2, dtype=psi.dtype), out)
    return out
