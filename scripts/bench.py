import time, argparse, os, sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from tace.engine.cache import MonthCache
from tace.engine.pipeline import process_months
from tace.io.sheet_loader import load_grids

parser = argparse.ArgumentParser()
parser.add_argument("source", help="Workbook (.xlsx), CSV file or directory of CSV files")
parser.add_argument("--runs", type=int, default=3)
args = parser.parse_args()

t0 = time.time()
grids = load_grids(args.source)
print(f"Load: {time.time() - t0:.3f}s | Sheets: {len(grids)}")

cache = MonthCache()
for run in range(1, args.runs + 1):
    t0 = time.time()
    report = process_months(grids, cache=cache)
    dt = time.time() - t0
    print(f"Run {run}: {dt:.3f}s | Months: {len(report.months)} | Skipped: {len(report.skipped)} "
          f"| Cache hits: {cache.hits}")
