#!/usr/bin/env python3
"""
Evaluation runner for the Huffman processor.

This evaluation script:
- Runs the pytest suite in tests/ and collects individual test results
- Compresses a corpus of files, checking each round trip and its ratio
- Writes a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--corpus FILE ...] [--output PATH]
"""
import os
import sys
import json
import time
import uuid
import platform
import subprocess
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from huffman_service import HuffmanService  # noqa: E402


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_git_commit():
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            timeout=5
        )
    except (OSError, subprocess.TimeoutExpired):
        return "unknown"
    if result.returncode != 0:
        return "unknown"
    return result.stdout.strip()[:8]


def get_environment_info():
    """Collect environment information for the report."""
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": get_git_commit(),
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []
    for line in output.split('\n'):
        line_stripped = line.strip()
        # Match lines like: tests/test_core.py::test_build_tree_weights PASSED
        if '::' not in line_stripped:
            continue
        for status_word, outcome in ((' PASSED', "passed"), (' FAILED', "failed"),
                                     (' ERROR', "error"), (' SKIPPED', "skipped")):
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break
    return tests


def summarize(tests):
    summary = {"total": len(tests)}
    for outcome in ("passed", "failed", "error", "skipped"):
        summary[outcome] = sum(1 for t in tests if t["outcome"] == outcome)
    return summary


def run_test_suite(tests_dir, timeout=600):
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")

    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(PROJECT_ROOT)
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {"success": False, "exit_code": -1, "tests": [], "summary": {"error": "timeout"}}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    print(f"Results: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['error']} errors, {summary['skipped']} skipped (total: {summary['total']})")
    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def measure_compression(path, service=None):
    """Round-trip one file in memory and report sizes, ratio and timings."""
    service = service or HuffmanService()
    data = Path(path).read_bytes()

    t0 = time.perf_counter()
    compressed = service.compress(data)
    t1 = time.perf_counter()
    restored = service.decompress(compressed)
    t2 = time.perf_counter()

    return {
        "file": str(path),
        "original_bytes": len(data),
        "compressed_bytes": len(compressed),
        "ratio": round(len(compressed) / len(data), 6) if data else None,
        "roundtrip_ok": restored == data,
        "compress_seconds": round(t1 - t0, 6),
        "decompress_seconds": round(t2 - t1, 6),
    }


def run_corpus(paths):
    print(f"\n{'=' * 60}")
    print("MEASURING COMPRESSION")
    print(f"{'=' * 60}")
    service = HuffmanService()
    results = []
    for path in paths:
        entry = measure_compression(path, service)
        status_icon = "✅" if entry["roundtrip_ok"] else "❌"
        print(f"  {status_icon} {path}: {entry['original_bytes']}B -> {entry['compressed_bytes']}B")
        results.append(entry)
    return results


def default_corpus():
    return sorted(str(p) for p in PROJECT_ROOT.glob("*.py"))


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman processor evaluation")
    parser.add_argument("--corpus", nargs="*", default=None, help="Files to compress (default: project sources)")
    parser.add_argument("--skip-tests", action="store_true", help="Only measure compression")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    test_results = None if args.skip_tests else run_test_suite(PROJECT_ROOT / "tests")
    corpus_results = run_corpus(args.corpus if args.corpus is not None else default_corpus())

    success = all(entry["roundtrip_ok"] for entry in corpus_results)
    if test_results is not None:
        success = success and test_results["success"]

    finished_at = datetime.now()
    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round((finished_at - started_at).total_seconds(), 6),
        "success": success,
        "environment": get_environment_info(),
        "tests": test_results,
        "corpus": corpus_results,
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
