# mini_qubit/bench.py
import argparse, csv, os, socket, subprocess, time
from datetime import datetime
import numpy as np
from .circuit import Circuit
from .gates import QuGate
from .state import Qubit

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

GATES = {
    "x": QuGate.pauli_x,
    "y": QuGate.pauli_y,
    "z": QuGate.pauli_z,
    "h": QuGate.hadamard,
}

DTYPES = {"complex64": np.complex64, "complex128": np.complex128}

def backend_dir(backend):
    path = os.path.join(DATA_DIR, backend)
    os.makedirs(path, exist_ok=True)
    return path

# ---------------------------------------------------------------------

def meta_row(dtype):
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "dtype": dtype,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }

APPLY_HEADER = ["gate","backend","reps","wall_ms","ns_per_apply","hostname","commit","dtype","timestamp"]
MEASURE_HEADER = ["circuit","backend","shots","seed","p0_expected","p0_observed","abs_err",
                  "hostname","commit","dtype","timestamp"]

def new_csv(path, header):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=header).writeheader()

def write_row(path, header, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=header).writerow(row)

# ---------------------------------------------------------------------

def parse_circuit(spec: str) -> Circuit:
    """'h,rz:0.5,x' -> Circuit.empty().h().rz(0.5).x()"""
    c = Circuit.empty()
    for tok in [t.strip() for t in spec.split(",") if t.strip()]:
        name, _, arg = tok.partition(":")
        name = name.lower()
        if name in ("x", "y", "z", "h"):
            getattr(c, name)()
        elif name in ("rx", "ry", "rz"):
            if not arg:
                raise ValueError(f"{name} needs an angle, e.g. {name}:0.5")
            getattr(c, name)(float(arg))
        else:
            raise ValueError(f"Unknown gate {name!r} in circuit {spec!r}")
    return c

def warmup(backend, dtype):
    # one dummy apply to JIT-compile the numba kernel
    QuGate.hadamard(dtype).apply(Qubit.zero(dtype), backend=backend)

def time_apply(gate, backend, reps, dtype):
    st = Qubit.zero(dtype)
    t0 = time.perf_counter()
    for _ in range(reps):
        st = gate.apply(st, backend=backend)
    return (time.perf_counter() - t0) * 1e3  # ms

# ---------------------------------------------------------------------
# individual experiments

def bench_apply(names, reps, backend, dtype_name, out_path):
    print(f"[run] Gate apply timing → {out_path}")
    dtype = DTYPES[dtype_name]
    new_csv(out_path, APPLY_HEADER)
    warmup(backend, dtype)
    for name in names:
        gate = GATES[name](dtype)
        wall = time_apply(gate, backend, reps, dtype)
        m = meta_row(dtype_name)
        write_row(out_path, APPLY_HEADER, {
            "gate": name, "backend": backend, "reps": reps, "wall_ms": f"{wall:.3f}",
            "ns_per_apply": f"{wall * 1e6 / max(reps, 1):.1f}", **m,
        })
        print(f"  gate={name}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_measure(circuits, shots, seed, backend, dtype_name, out_path):
    print(f"[run] Measurement statistics → {out_path}")
    dtype = DTYPES[dtype_name]
    new_csv(out_path, MEASURE_HEADER)
    rng = np.random.default_rng(seed)
    for spec in circuits:
        st = parse_circuit(spec).run(backend=backend, dtype=dtype)
        p0 = float(st.zero_probability())
        outcomes = st.sample(shots, rng=rng)
        observed = float(np.mean(outcomes == 0)) if shots else float("nan")
        m = meta_row(dtype_name)
        write_row(out_path, MEASURE_HEADER, {
            "circuit": spec, "backend": backend, "shots": shots, "seed": seed,
            "p0_expected": f"{p0:.6f}", "p0_observed": f"{observed:.6f}",
            "abs_err": f"{abs(observed - p0):.6f}", **m,
        })
        print(f"  circuit={spec}  p0={p0:.4f}  observed={observed:.4f}")
    print("✓ done.\n")

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="mini_qubit benchmarks → data/<backend>/*.csv (auto)")
    p.add_argument("--backend", type=str, default="serial", choices=["serial","numba"])
    p.add_argument("--dtype", type=str, default="complex128", choices=sorted(DTYPES))
    sub = p.add_subparsers(dest="cmd", required=True)

    p_apply = sub.add_parser("apply")
    p_apply.add_argument("--gates", type=str, default="x,y,z,h")
    p_apply.add_argument("--reps", type=int, default=10000)

    p_measure = sub.add_parser("measure")
    # circuits are separated by ';', gates within a circuit by ','
    p_measure.add_argument("--circuits", type=str, default="h;rx:0.5;h,z,h;ry:2.0")
    p_measure.add_argument("--shots", type=int, default=10000)
    p_measure.add_argument("--seed", type=int, default=0)

    args = p.parse_args(argv)

    base = backend_dir(args.backend)

    if args.cmd == "apply":
        names = [x.strip().lower() for x in args.gates.split(",") if x.strip()]
        unknown = [x for x in names if x not in GATES]
        if unknown:
            p.error(f"unknown gates: {','.join(unknown)}")
        out_path = os.path.join(base, "apply.csv")
        bench_apply(names, args.reps, args.backend, args.dtype, out_path)

    elif args.cmd == "measure":
        circuits = [x.strip() for x in args.circuits.split(";") if x.strip()]
        out_path = os.path.join(base, "measure.csv")
        bench_measure(circuits, args.shots, args.seed, args.backend, args.dtype, out_path)

if __name__ == "__main__":
    main()
