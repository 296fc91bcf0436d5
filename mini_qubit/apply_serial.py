# mini_qubit/apply_serial.py
import numpy as np

def check_shapes(psi: np.ndarray, U2: np.ndarray):
    if U2.shape != (2,2):
        raise ValueError(f"U2 must have shape (2,2), got {U2.shape}")
    if psi.shape != (2,):
        raise ValueError(f"psi must have shape (2,), got {psi.shape}")

def apply_single_qubit(psi: np.ndarray, U2: np.ndarray) -> np.ndarray:
    """Return U2 @ psi as a new array; psi and U2 are not modified."""
    check_shapes(psi, U2)
    out = np.empty_like(psi)
    a0 = psi[0]
    a1 = psi[1]
    out[0] = U2[0,0]*a0 + U2[0,1]*a1
    out[1] = U2[1,0]*a0 + U2[1,1]*a1
    return out
