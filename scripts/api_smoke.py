#!/usr/bin/env python3
"""
Smoke test against a running server:
    python run_server.py
    python scripts/api_smoke.py [base_url]
"""
import sys
import json

import requests

BASE = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:8000"

STORE = {
    "monthly_visitors": 50000,
    "current_cvr": 2.5,
    "aov": 80,
    "ad_spend": 10000,
    "scenario": "expected",
    "reinvestment_percent": 50,
    "monthly_investment": 4000,
    "projection_months": 6,
}

def run_api_smoke_test():
    print(f"--- Running API Smoke Test against {BASE} ---")
    try:
        print("\n[1/3] GET /scenarios")
        r = requests.get(f"{BASE}/scenarios", timeout=5)
        r.raise_for_status()
        print(f"✅ {len(r.json())} scenarios: {[s['id'] for s in r.json()]}")

        print("\n[2/3] POST /calculate")
        r = requests.post(f"{BASE}/calculate", json=STORE, timeout=5)
        r.raise_for_status()
        data = r.json()
        assert data["current"]["revenue"] == 100000, data["current"]
        assert len(data["projection"]) == STORE["projection_months"]
        print(f"✅ ROI {data['roi']['roi_multiple']}x, payback {data['roi']['payback_months']} months")
        print(json.dumps(data["totals"], indent=2))

        print("\n[3/3] POST /export/csv")
        r = requests.post(f"{BASE}/export/csv", json=STORE, timeout=5)
        r.raise_for_status()
        print(f"✅ {len(r.text.splitlines()) - 1} csv rows")

        print("\n--- ✅ Smoke Test Passed Successfully! ---")

    except requests.exceptions.ConnectionError:
        print(f"Error: Could not connect to server at {BASE}")
        print("Make sure the server is running with: python run_server.py")
        sys.exit(1)
    except (requests.HTTPError, AssertionError) as e:
        print(f"\n--- ❌ Smoke Test FAILED ---")
        print(f"Error: {e}")
        sys.exit(2)

if __name__ == "__main__":
    run_api_smoke_test()
