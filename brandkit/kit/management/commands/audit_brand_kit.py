"""
Management command to audit a brand kit document.

PR-6: Completeness + gap report from the command line.

Usage:
    python -m django audit_brand_kit kit.json --brand-name Acme --domain acme.com
    cat analysis.json | python -m django audit_brand_kit - --analysis

Input is either a persisted brand kit document or, with --analysis, an
upstream analysis payload ({"brand_kit": ..., "brand_scores": ...}).

Output is one JSON object on stdout:
    {metrics, critical_gaps, gaps_summary, strengths, risks, audit}

Failure Behavior:
- Unreadable files, invalid JSON and non-object documents raise CommandError.
- Malformed fields inside a valid document never fail the command; they are
  replaced by schema defaults and reported under "audit".
"""

import json
import sys

from django.core.management.base import BaseCommand, CommandError

from brandkit.kit.gaps import build_critical_gaps, build_strengths_and_risks
from brandkit.kit.normalization import (
    audit_raw_payload,
    load_brand_kit,
    transform_analysis_to_brand_kit,
)
from brandkit.kit.normalization.service import DEFAULT_BRAND_NAME, DEFAULT_DOMAIN
from brandkit.kit.scoring import calculate_data_quality_metrics


class Command(BaseCommand):
    """Print completeness metrics and gaps for a brand kit document."""

    help = "Print completeness metrics and gaps for a brand kit JSON document"

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            type=str,
            help="Path to a JSON document, or - for stdin",
        )
        parser.add_argument(
            "--analysis",
            action="store_true",
            help="Treat the input as an analysis payload instead of a kit document",
        )
        parser.add_argument(
            "--brand-name",
            type=str,
            default=DEFAULT_BRAND_NAME,
            help=f"Brand name used for synthesized fields (default: {DEFAULT_BRAND_NAME})",
        )
        parser.add_argument(
            "--domain",
            type=str,
            default=DEFAULT_DOMAIN,
            help=f"Domain used for synthesized fields (default: {DEFAULT_DOMAIN})",
        )

    def _read_document(self, path: str) -> dict:
        try:
            if path == "-":
                text = sys.stdin.read()
            else:
                with open(path, encoding="utf-8") as handle:
                    text = handle.read()
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}")

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}")

        if not isinstance(document, dict):
            raise CommandError(f"Expected a JSON object in {path}, got {type(document).__name__}")
        return document

    def handle(self, *args, **options):
        document = self._read_document(options["path"])
        brand_name = options["brand_name"]
        domain = options["domain"]

        audit = audit_raw_payload(document)
        if options["analysis"]:
            kit = transform_analysis_to_brand_kit(document, domain, brand_name)
        else:
            kit = load_brand_kit(document, brand_name, domain)

        scores = document.get("brand_scores")
        ranked = build_strengths_and_risks(scores if isinstance(scores, dict) else None)

        report = {
            "metrics": calculate_data_quality_metrics(kit).model_dump(mode="json", by_alias=True),
            "critical_gaps": [
                gap.model_dump(mode="json") for gap in build_critical_gaps(kit)
            ],
            "gaps_summary": kit.gaps_summary.model_dump(mode="json"),
            "strengths": [item.model_dump(mode="json") for item in ranked.strengths],
            "risks": [item.model_dump(mode="json") for item in ranked.risks],
            "audit": audit.to_dict(),
        }
        self.stdout.write(json.dumps(report, indent=2))

        if audit.malformed_paths and options.get("verbosity", 1) >= 1:
            self.stderr.write(
                self.style.WARNING(
                    f"{len(audit.malformed_paths)} malformed fields replaced by defaults"
                )
            )
