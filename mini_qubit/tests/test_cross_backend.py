import numpy as np
import pytest
from mini_qubit.apply_serial import apply_single_qubit
from mini_qubit.circuit import Circuit
from mini_qubit.gates import QuGate
from mini_qubit.state import Qubit

pytest.importorskip("numba")

def max_abs_diff(a, b):
    return float(np.max(np.abs(a - b)))

@pytest.mark.parametrize("dtype", [np.complex64, np.complex128])
def test_named_gates_match_exactly(dtype):
    for make in (QuGate.pauli_x, QuGate.pauli_y, QuGate.pauli_z, QuGate.hadamard):
        g = make(dtype)
        for start in (Qubit.zero(dtype), Qubit.one(dtype)):
            assert g.apply(start, backend="numba") == g.apply(start, backend="serial")

def test_serial_vs_numba_small():
    c = Circuit.empty().h().rx(0.3).y().rz(1.1).h().ry(0.5)
    st_s = c.run(backend="serial", dtype=np.complex64)
    st_n = c.run(backend="numba", dtype=np.complex64)
    d = max_abs_diff(st_s.get_state(), st_n.get_state())
    assert d < 1e-6

def test_random_circuits_match():
    rng = np.random.default_rng(123)
    for depth in (5, 10, 20):
        c = Circuit.empty()
        for _ in range(depth):
            g = rng.integers(0, 4)  # 0:H,1:X,2:RZ,3:RY
            if g == 0:
                c.h()
            elif g == 1:
                c.x()
            elif g == 2:
                c.rz(float(rng.uniform(0, 2*np.pi)))
            else:
                c.ry(float(rng.uniform(0, 2*np.pi)))
        s = c.run(backend="serial")
        t = c.run(backend="numba")
        assert np.allclose(s.get_state(), t.get_state(), atol=1e-12, rtol=0)

def test_kernel_shape_checks():
    from mini_qubit.apply_numba import apply_single_qubit as apply_jit
    psi = np.array([1, 0], dtype=np.complex128)
    for kernel in (apply_single_qubit, apply_jit):
        with pytest.raises(ValueError):
            kernel(psi, np.eye(3, dtype=np.complex128))
        with pytest.raises(ValueError):
            kernel(np.zeros(4, dtype=np.complex128), np.eye(2, dtype=np.complex128))
