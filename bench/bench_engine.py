import argparse
import statistics
import time

from rolegate import build_engine


def gen_config(n: int) -> dict:
    """A chain of *n* roles; only the root role holds rules, so every query walks the chain."""
    roles = {"role_0": []}
    for i in range(1, n):
        roles[f"role_{i}"] = [f"role_{i - 1}"]
    resources = {f"res_{i}": ["read", "write"] for i in range(n)}
    return {
        "roles": roles,
        "resources": resources,
        "allow": {"role_0": {"*": ["read"]}},
        "deny": {"role_0": {f"res_{n // 2}": ["read"]}},
    }


def run(size: int, iters: int):
    engine = build_engine(gen_config(size))
    role = f"role_{size - 1}"
    lat = []
    for _ in range(iters):
        t0 = time.perf_counter()
        allowed = engine.is_allowed(role, f"res_{size // 2}", "read")
        lat.append((time.perf_counter() - t0) * 1000.0)
    return {
        "p50": statistics.median(lat),
        "avg": sum(lat) / len(lat),
        "p90": percentile(lat, 90),
        "allowed": allowed,
    }


def percentile(arr, p):
    arr2 = sorted(arr)
    k = int(round((p / 100.0) * (len(arr2) - 1)))
    return arr2[k]


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[10, 50, 100, 500])
    ap.add_argument("--iters", type=int, default=200)
    args = ap.parse_args()
    print("size,avg_ms,p50_ms,p90_ms,allowed")
    for s in args.sizes:
        r = run(s, args.iters)
        print(f"{s},{r['avg']:.3f},{r['p50']:.3f},{r['p90']:.3f},{r['allowed']}")


if __name__ == "__main__":
    main()
