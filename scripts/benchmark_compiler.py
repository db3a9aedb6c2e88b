"""Benchmark inline conversion vs block compilation on pathological inputs.

Run:
    uv run python scripts/benchmark_compiler.py
"""

from __future__ import annotations

from multiprocessing import Process, Queue
import statistics
import time

from slackmd.compiler import compile_blocks
from slackmd.mrkdwn import convert_inline

SIZES = [10_000, 50_000, 100_000]
RUNS = 3
TIMEOUT_SECONDS = 15.0


def _brackets(n: int) -> str:
    return "[" * (n // 2) + "x" + "]" * (n // 2)


def _backticks(n: int) -> str:
    return "`a" * (n // 2)


def _asterisks(n: int) -> str:
    return "**a " * (n // 4)


def _table(n: int) -> str:
    row = "| " + " | ".join(["cell"] * 30) + " |"
    header = "| " + " | ".join(["---"] * 30) + " |"
    return "\n".join([row, header, *[row] * (n // len(row))])


INPUTS = {
    "brackets": _brackets,
    "backticks": _backticks,
    "asterisks": _asterisks,
    "table": _table,
}


def _worker(queue: Queue[float], label: str, text: str) -> None:
    started = time.perf_counter()
    if label == "convert_inline":
        convert_inline(text)
    else:
        compile_blocks(text)
    queue.put(time.perf_counter() - started)


def _run_once_with_timeout(label: str, text: str, timeout: float) -> float | None:
    queue: Queue[float] = Queue(maxsize=1)
    process = Process(target=_worker, args=(queue, label, text))
    process.start()
    process.join(timeout=timeout)
    if process.is_alive():
        process.kill()
        process.join()
        return None
    if queue.empty():
        return None
    return queue.get()


def bench(label: str, text: str) -> float | None:
    measurements: list[float] = []
    for _ in range(RUNS):
        elapsed = _run_once_with_timeout(label, text, TIMEOUT_SECONDS)
        if elapsed is None:
            print(f"  {label:16s} timeout>{TIMEOUT_SECONDS:.1f}s")
            return None
        measurements.append(elapsed)
    avg = statistics.mean(measurements)
    print(
        f"  {label:16s} avg={avg:8.4f}s "
        f"min={min(measurements):8.4f}s max={max(measurements):8.4f}s"
    )
    return avg


def main() -> None:
    print("Benchmark: pathological markdown compilation")
    print(f"runs per case: {RUNS}")
    print(f"timeout per run: {TIMEOUT_SECONDS:.1f}s")

    for name, make in INPUTS.items():
        for n in SIZES:
            text = make(n)
            print(f"\n{name} input length={len(text)}")
            bench("convert_inline", text)
            bench("compile_blocks", text)


if __name__ == "__main__":
    main()
