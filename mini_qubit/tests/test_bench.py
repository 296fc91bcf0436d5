import csv, os
import pytest
from mini_qubit import bench

@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(bench, "DATA_DIR", str(tmp_path))
    return tmp_path

def read_csv(path):
    with open(path, newline="") as f:
        return list(csv.DictReader(f))

def test_parse_circuit():
    c = bench.parse_circuit("h, rz:0.5 ,X")
    assert c.ops == [("H", ()), ("RZ", (0.5,)), ("X", ())]
    with pytest.raises(ValueError):
        bench.parse_circuit("cnot")
    with pytest.raises(ValueError):
        bench.parse_circuit("rx")

def test_apply_writes_rows(data_dir):
    bench.main(["apply", "--gates", "x,h", "--reps", "20"])
    rows = read_csv(os.path.join(data_dir, "serial", "apply.csv"))
    assert [r["gate"] for r in rows] == ["x", "h"]
    assert all(float(r["wall_ms"]) >= 0 for r in rows)
    assert all(r["dtype"] == "complex128" for r in rows)

def test_apply_rejects_unknown_gate(data_dir):
    with pytest.raises(SystemExit):
        bench.main(["apply", "--gates", "x,cnot"])

def test_measure_statistics(data_dir):
    bench.main(["--dtype", "complex64", "measure", "--circuits", "x;h;ry:2.0",
                "--shots", "4000", "--seed", "3"])
    rows = read_csv(os.path.join(data_dir, "serial", "measure.csv"))
    assert [r["circuit"] for r in rows] == ["x", "h", "ry:2.0"]
    x_row = rows[0]
    assert float(x_row["p0_expected"]) == 0.0
    assert float(x_row["p0_observed"]) == 0.0
    for r in rows:
        assert float(r["abs_err"]) < 0.05

def test_plot_results(data_dir, monkeypatch):
    mpl = pytest.importorskip("matplotlib")
    mpl.use("Agg")
    from mini_qubit import plot_results
    monkeypatch.setattr(plot_results, "DATA_DIR", str(data_dir))
    bench.main(["apply", "--gates", "z", "--reps", "5"])
    bench.main(["measure", "--circuits", "h", "--shots", "100"])
    plot_results.main()
    assert os.path.exists(os.path.join(data_dir, "serial", "apply_serial.png"))
    assert os.path.exists(os.path.join(data_dir, "serial", "measure_serial.png"))
