from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List

from tace.engine.pipeline import DashboardReport, process_months
from tace.errors import TaceError
from tace.io.excel_export import export_dashboard
from tace.io.sheet_loader import load_grids
from tace.models.validated import load_settings
from tace.ui.tables import format_rate
from tace.utils.logging_setup import setup_logging


def _report_dict(report: DashboardReport) -> Dict[str, Any]:
    return {
        "months": [s.to_dict() for s in report.summaries],
        "skipped": dict(report.skipped),
        "alerts": [a.to_dict() for a in report.alerts],
    }


def _print_text(report: DashboardReport) -> None:
    print("Résumé mensuel:")
    for s in report.summaries:
        trend = (s.trends or {}).get("real_rate")
        trend_str = f" ({trend:+.1f} pts)" if trend is not None else ""
        print(f" - {s.month}: réel {format_rate(s.real_rate)}{trend_str}, "
              f"estimé {format_rate(s.estimated_rate)}")
    for month, reason in report.skipped.items():
        print(f" ! {month} ignoré: {reason}")
    print("Alertes:")
    for a in report.alerts:
        print(f" [{a.level.value}] {a.title}: {a.message}")


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="TACE — taux d'activité par équipe")
    p.add_argument("source", nargs="?", help="Classeur .xlsx, CSV ou dossier de CSV")
    p.add_argument("--settings", help="Fichier de paramètres JSON (défaut: $TACE_SETTINGS)")
    p.add_argument("--month", action="append", dest="months",
                   help="Limiter à ce mois (répétable), ex: 'Octobre 2025'")
    p.add_argument("--export", help="Exporter le résumé dans ce fichier .xlsx")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--json", dest="json_out", action="store_true", help="Sortie JSON (summary)")
    args = p.parse_args(argv)

    try:
        settings = load_settings(args.settings)
        level = "DEBUG" if args.verbose >= 1 else settings.log_level
        setup_logging(level=level, log_file=settings.log_file,
                      console_level=level if args.verbose else "WARNING")

        source = args.source or settings.spreadsheet_path
        if not source:
            p.error("no source given (argument or spreadsheet_path setting)")

        grids = load_grids(source)
        if args.months:
            grids = {k: v for k, v in grids.items() if k in args.months}
        report = process_months(grids, settings.to_dataclass())

        if args.export:
            export_dashboard(report.summaries, args.export)
    except TaceError as e:
        print(f"Erreur: {e}", file=sys.stderr)
        return 1

    if args.json_out:
        print(json.dumps(_report_dict(report), ensure_ascii=False, indent=2))
    else:
        _print_text(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
