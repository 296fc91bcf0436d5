# mini_qubit/circuit.py
from dataclasses import dataclass
from typing import List, Tuple, Optional
import numpy as np
from .state import Qubit
from .gates import QuGate

Op = Tuple[str, Tuple]  # e.g., ("H",()) or ("RZ",(theta,)) or ("GATE",(QuGate,))

@dataclass
class Circuit:
    """Ordered gate list; run() applies the gates one at a time."""
    ops: List[Op]

    @staticmethod
    def empty() -> "Circuit":
        return Circuit([])

    def x(self): self.ops.append(("X",())); return self
    def y(self): self.ops.append(("Y",())); return self
    def z(self): self.ops.append(("Z",())); return self
    def h(self): self.ops.append(("H",())); return self
    def rx(self, theta:float): self.ops.append(("RX",(theta,))); return self
    def ry(self, theta:float): self.ops.append(("RY",(theta,))); return self
    def rz(self, theta:float): self.ops.append(("RZ",(theta,))); return self
    def gate(self, g:QuGate): self.ops.append(("GATE",(g,))); return self

    def to_gates(self, dtype=np.complex128) -> List[QuGate]:
        gates = []
        for name, args in self.ops:
            if name == "X":
                gates.append(QuGate.pauli_x(dtype))
            elif name == "Y":
                gates.append(QuGate.pauli_y(dtype))
            elif name == "Z":
                gates.append(QuGate.pauli_z(dtype))
            elif name == "H":
                gates.append(QuGate.hadamard(dtype))
            elif name == "RX":
                (theta,) = args; gates.append(QuGate.rx(theta, dtype))
            elif name == "RY":
                (theta,) = args; gates.append(QuGate.ry(theta, dtype))
            elif name == "RZ":
                (theta,) = args; gates.append(QuGate.rz(theta, dtype))
            elif name == "GATE":
                (g,) = args; gates.append(g)
            else:
                raise ValueError(f"Unknown gate {name}")
        return gates

    def run(self, initial:Optional[Qubit]=None, backend:str="serial", dtype=np.complex128,
            check_norm=False, check_norm_tol=None) -> Qubit:
        st = Qubit.zero(dtype) if initial is None else initial
        for g in self.to_gates(dtype=st.dtype):
            st = g.apply(st, backend=backend)
        if check_norm:
            st.check_normalized(tol=check_norm_tol)
        return st

    def __len__(self):
        return len(self.ops)
