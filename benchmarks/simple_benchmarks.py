import time
from concurrent.futures import ThreadPoolExecutor
from timeit import timeit

from lispcore.interpreter import interpret
from lispcore.sessions.manager import SessionManager
from lispcore.types.symbol import Symbol
from lispcore.types.environment import Environment

# Helpers to parse once, and to measure evaluation separately from reading
from lispcore.reader.parser import read
from lispcore.syntax.builder import build
from lispcore.evaluation.evaluator import evaluate


def time_pipeline(code: str, rounds: int) -> float:
    """Time read + build + evaluate for every round."""
    env = Environment()
    interpret(code, env)  # Warmup
    return timeit(lambda: interpret(code, env), number=rounds)


def time_evaluator(code: str, rounds: int) -> float:
    """Time evaluation only: the expression tree is built once up front."""
    env = Environment()
    expr = build(read(code))
    evaluate(expr, env)  # Warmup
    return timeit(lambda: evaluate(expr, env), number=rounds)


# Micro-benchmark: environment lookup chain

def bench_lookup_chain(n_envs: int = 1000, n_lookups: int = 10000) -> float:
    # Build an environment chain with a binding at the root
    root = Environment()
    key = Symbol("answer")
    root.define(key, 42)
    env = root
    for _ in range(n_envs):
        env = env.child()
    # Warmup
    for _ in range(1000):
        env.lookup(key)
    # Timed
    t = timeit(lambda: env.lookup(key), number=n_lookups)
    return t


# Load test: many threads firing requests at a handful of sessions

def bench_sessions_under_load(n_sessions: int = 8, n_workers: int = 32, n_requests: int = 20000) -> float:
    manager = SessionManager()
    ids = [manager.create_session() for _ in range(n_sessions)]
    for sid in ids:
        manager.evaluate(sid, "(define counter 0)")

    def fire(i: int) -> None:
        manager.evaluate(ids[i % n_sessions], "(define counter (+ counter 1))")

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        list(pool.map(fire, range(n_requests)))
    elapsed = time.perf_counter() - start

    total = sum(manager.get_variable(sid, "counter") for sid in ids)
    assert total == n_requests, f"lost updates: {total} != {n_requests}"
    manager.close()
    return elapsed


ARITH_CODE = "(+ (* 2 3) (- 10 (/ 8 2)))"

NESTED_IF_CODE = "(if (> 10 5) (if (< 3 4) (+ 1 2 3 4) 0) (/ 1 0))"

COUNTER_CODE = "(define counter (+ (if (> 1 0) 1 0) 1))"


def _print_pair(name: str, code: str, rounds: int) -> None:
    tpipe = time_pipeline(code, rounds)
    teval = time_evaluator(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  read+build+eval: {tpipe:.6f}s  |  eval only: {teval:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    print("Benchmark: environment lookup chain")
    print(f"  time: {bench_lookup_chain():.6f}s")

    _print_pair("nested arithmetic", ARITH_CODE, rounds=20000)
    _print_pair("nested conditionals", NESTED_IF_CODE, rounds=20000)
    _print_pair("define", COUNTER_CODE, rounds=20000)

    print("Benchmark: 20000 requests over 8 sessions, 32 threads")
    print(f"  time: {bench_sessions_under_load():.6f}s")
