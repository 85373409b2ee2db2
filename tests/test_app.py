import subprocess
import sys


def _run(*args):
    return subprocess.run(
        [sys.executable, "-m", "queue_time.app", *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_app_help_runs():
    proc = _run("-h")
    assert proc.returncode == 0
    out = proc.stdout + proc.stderr
    assert "main entrypoint" in out
    assert "compute" in out
    assert "serve" in out


def test_request_help_runs():
    proc = _run("request", "-h")
    assert proc.returncode == 0
    out = proc.stdout + proc.stderr
    assert "--durations" in out
    assert "--stations" in out
    assert "--mqtt-host" in out


def test_compute_prints_total_time():
    proc = _run("compute", "--durations", "2,2,3,3,4,4", "--stations", "2")
    assert proc.returncode == 0
    assert "total_time=9" in proc.stdout


def test_compute_tick_method_with_schedule():
    proc = _run("compute", "--durations", "[1, 2, 3, 4]", "--stations", "1", "--method", "tick", "--schedule")
    assert proc.returncode == 0
    assert "customer 3 -> till 0 (6..10)" in proc.stdout
    assert "total_time=10" in proc.stdout


def test_compute_rejects_zero_stations():
    proc = _run("compute", "--durations", "1,2", "--stations", "0")
    assert proc.returncode == 2
    assert "stations must be >= 1" in proc.stderr


def test_random_is_deterministic_with_seed():
    a = _run("random", "--count", "25", "--stations", "4", "--seed", "7")
    b = _run("random", "--count", "25", "--stations", "4", "--seed", "7")
    assert a.returncode == 0
    assert a.stdout == b.stdout
    assert "total_time=" in a.stdout
