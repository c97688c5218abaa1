from __future__ import annotations
from typing import List, Optional
from dataclasses import dataclass

import sys, json, time, math

from arithmetic import FractionValue
from diagnostics import PrintDiagnostics
from formats import get_int_format
from parsing import parse_value, parse_values, load_values_from_npy_file, ParseError
from rational_search import RationalSearch, RangeError, PrecisionError, Outcome, SearchResult

USAGE = "Usage: {} [--trace] <int_format> <value|[v1,v2,...]|values.npy> [precision|eps] [report.json]"

@dataclass(frozen=True)
class FloatStats:
    mean: Optional[float]
    minimum: Optional[float]
    maximum: Optional[float]

def compute_stats(vals: List[float]) -> FloatStats:
    if not vals:
        return FloatStats(None, None, None)
    fsum = math.fsum(vals)
    return FloatStats(fsum/len(vals), min(vals), max(vals))

class FractionEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, FractionValue):
            return str(obj)
        if isinstance(obj, Outcome):
            return obj.value
        return super().default(obj)

def result_record(result: SearchResult) -> dict:
    return {
        "value": result.value,
        "precision": result.precision,
        "fraction": result.fraction,
        "numerator": result.fraction.numerator,
        "denominator": result.fraction.denominator,
        "outcome": result.outcome,
        "iterations": result.iterations,
        "residual": result.residual,
    }

def summarize(results: List[SearchResult], range_errors: int) -> dict:
    counts = {o.value: 0 for o in Outcome}
    for r in results:
        counts[r.outcome.value] += 1
    res_stats = compute_stats([r.residual for r in results])
    it_stats = compute_stats([float(r.iterations) for r in results])
    return {
        "count": len(results) + range_errors,
        "outcomes": counts,
        "range_errors": range_errors,
        "residual": res_stats.__dict__,
        "iterations": it_stats.__dict__,
    }

def save_report(int_format: str, results: List[SearchResult], summary: dict, filename: str):
    report = {}
    report["int_format"] = int_format
    report["results"] = [result_record(r) for r in results]
    report["summary"] = summary

    with open(filename, "w") as f:
        f.write(json.dumps(report, indent=2, cls=FractionEncoder))
        f.flush()

def load_values(arg: str):
    if arg.endswith(".npy"):
        return load_values_from_npy_file(arg)
    return parse_values(arg)

def main(argv: Optional[List[str]] = None):
    argv = sys.argv if argv is None else argv
    trace = "--trace" in argv[1:]
    argv = [a for i, a in enumerate(argv) if i == 0 or a != "--trace"]
    if not 3 <= len(argv) <= 5:
        print(USAGE.format(argv[0] if argv else "fraction_finder.py"))
        sys.exit(1)

    try:
        fmt = get_int_format(argv[1])
    except NotImplementedError as e:
        print(f"Error: {e}"); sys.exit(1)

    try:
        values = load_values(argv[2])
    except ParseError as e:
        print(f"Error parsing values: {e}"); sys.exit(1)
    except FileNotFoundError:
        print(f"Error: file not found: {argv[2]}"); sys.exit(1)
    except (TypeError, ValueError) as e:
        print(f"Error loading values: {e}"); sys.exit(1)

    precision = None
    if len(argv) >= 4 and argv[3].lower() != "eps":
        try:
            precision = parse_value(argv[3])
        except ParseError as e:
            print(f"Error parsing precision: {e}"); sys.exit(1)

    report_file = argv[4] if len(argv) == 5 else None
    engine = RationalSearch(fmt, diagnostics=PrintDiagnostics() if trace else None)

    print(f"Approximating {len(values)} value(s) with {fmt.name} fractions...")
    results: List[SearchResult] = []
    range_errors = 0
    elapsed = 0.0
    for value in values:
        t0 = time.perf_counter()
        try:
            result = engine.search(value, precision)
        except RangeError as e:
            print(f"  {value}: ERROR {e}")
            range_errors += 1
            continue
        except PrecisionError as e:
            print(f"Error: {e}"); sys.exit(1)
        finally:
            elapsed += time.perf_counter() - t0
        results.append(result)
        print(f"  {value} -> {result.fraction} = {result.fraction.to_float()!r} "
              f"({result.outcome.value}, {result.iterations} iterations, residual {result.residual:.3e})")
        if not result.within_precision:
            print(f"WARNING: {value} not within precision {result.precision:.3e}; "
                  f"best {fmt.name} bound is {result.fraction.decimal()}")

    summary = summarize(results, range_errors)
    print("\nFRACTION RESULTS")
    print(f"Of {summary['count']} values:")
    for name, n in summary["outcomes"].items():
        print(f"  {name}: {n}")
    print(f"  range errors: {range_errors}")
    print(f"Residual: mean {summary['residual']['mean']}, max {summary['residual']['maximum']}")
    print(f"Iterations: mean {summary['iterations']['mean']}, max {summary['iterations']['maximum']}")
    N = len(values) if values else 1
    print(f"Average time (ms, over {len(values)} values): {elapsed * 1000 / N}")

    if report_file is not None:
        save_report(fmt.name, results, summary, report_file)
        print(f"Report written to {report_file}")

if __name__ == "__main__":
    main()
