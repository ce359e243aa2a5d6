# scripts/doctor.py
import os, sys, time, subprocess, socket, contextlib
from importlib import metadata
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

REQUIRED_DISTS = ["fastapi", "pydantic", "uvicorn", "pandas", "numpy", "python-pptx", "requests"]

def ok(msg):  print(f"[OK]  {msg}")
def warn(msg):print(f"[WARN] {msg}")
def fail(msg):print(f"[FAIL] {msg}")

def check_python():
    v = sys.version_info
    if v < (3,10):
        fail(f"Python {v.major}.{v.minor} < 3.10")
        return False
    ok(f"Python {v.major}.{v.minor}")
    return True

def check_requirements():
    missing = []
    for dist in REQUIRED_DISTS:
        try:
            metadata.version(dist)
        except metadata.PackageNotFoundError:
            missing.append(dist)
    if missing:
        fail(f"Missing: {', '.join(missing)}")
        return False
    ok("requirements satisfied")
    return True

def check_engine():
    sys.path.insert(0, str(PROJECT_ROOT))

    try:
        from roicalc.models.metrics import InputMetrics
        from roicalc.services.state import compute_current_state
        from roicalc.services.projections import generate_projection
        m = InputMetrics(monthly_visitors=50000, current_cvr=2.5, aov=80, ad_spend=10000)
        rev = compute_current_state(m).revenue
        if abs(rev - 100000) > 1e-6:
            fail(f"compute_current_state revenue {rev} != 100000")
            return False
        ok("roicalc.services.state OK (reference store revenue 100000)")
        series = generate_projection(m, "expected", 0, 6)
        if abs(series[2].improved - 125000) > 1e-6:
            fail(f"month-3 improved revenue {series[2].improved} != 125000")
            return False
        ok("roicalc.services.projections OK (month-3 at full ramp)")
    except Exception as e:
        fail(f"engine problem: {e}")
        return False

    try:
        import roicalc.app as A
        ok(f"roicalc.app imports ({A.app.title})")
    except Exception as e:
        fail(f"roicalc.app problem: {e}")
        return False

    return True

def wait_healthy(base, proc, timeout=15.0):
    """Poll /health until the server answers or the process dies."""
    import requests
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if proc.poll() is not None:
            err = proc.stderr.read().decode("utf-8", "replace").strip()
            raise RuntimeError(f"uvicorn exited with {proc.returncode}: {err[-400:]}")
        try:
            if requests.get(base + "/health", timeout=1).ok:
                return
        except requests.ConnectionError:
            pass
        time.sleep(0.2)
    raise RuntimeError(f"no answer from {base}/health after {timeout:.0f}s")

@contextlib.contextmanager
def uvicorn_server():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(PROJECT_ROOT)
    env.setdefault("ROICALC_LOG_LEVEL", "WARNING")
    cmd = [sys.executable, "-m", "uvicorn", "roicalc.app:app", "--port", str(port), "--log-level", "warning"]
    proc = subprocess.Popen(cmd, cwd=str(PROJECT_ROOT), env=env, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
    base = f"http://127.0.0.1:{port}"
    try:
        wait_healthy(base, proc)
        yield base
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=3)
        except subprocess.TimeoutExpired:
            proc.kill()

def http_json(url, method="GET", body=None):
    import requests
    resp = requests.request(method, url, json=body, timeout=5)
    resp.raise_for_status()
    return resp.json()

def main():
    print("== roicalc doctor ==\n")
    ok("Project root: " + str(PROJECT_ROOT))

    all_good = True
    all_good &= check_python()
    all_good &= check_requirements()
    all_good &= check_engine()

    if not all_good:
        fail("Static checks failed. Fix above and re-run.")
        sys.exit(1)

    try:
        with uvicorn_server() as base:
            meta = http_json(base + "/meta")
            ok(f"/meta ok (algo_version={meta.get('algo_version')})")

            sc = http_json(base + "/scenarios")
            ok(f"/scenarios ok (items={len(sc)})")

            body = {
                "monthly_visitors": 120000,
                "current_cvr": 1.8,
                "aov": 145,
                "ad_spend": 25000,
                "scenario": sc[0]["id"],
                "reinvestment_percent": 50,
                "monthly_investment": 6000,
                "projection_months": 6,
            }
            out = http_json(base + "/calculate", method="POST", body=body)
            ok(f"/calculate ok (tier={out['qualification_tier']}, roi={out['roi']['roi_multiple']}x)")
    except Exception as e:
        fail(f"Live API check failed: {e}")
        sys.exit(2)

    print("\nAll checks passed ✅")

if __name__ == "__main__":
    main()
