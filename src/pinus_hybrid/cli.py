# src/pinus_hybrid/cli.py
from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pinus_hybrid.__version__ import __version__
from pinus_hybrid.analyzer import HybridClassifier
from pinus_hybrid.classification.visual import VisualFeatures
from pinus_hybrid.config import ConfidenceDenominator, KNNConfig
from pinus_hybrid.dataset import QueryPoint, load_query_points, load_training_set
from pinus_hybrid.exceptions import PinusError
from pinus_hybrid.utils.logging import setup_logging
from pinus_hybrid.utils.reports import ReportUtils
from pinus_hybrid.utils.summary import SummaryUtils


# -----------------------------
# Helpers
# -----------------------------
def _parse_pairs(s: str) -> Dict[str, float]:
    """Parse ``name=value,name=value`` into a dict of floats."""
    out: Dict[str, float] = {}
    for chunk in re.split(r"[,;]", s):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "=" not in chunk:
            raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {chunk!r}")
        name, value = chunk.split("=", 1)
        try:
            out[name.strip()] = float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not out:
        raise argparse.ArgumentTypeError("expected at least one NAME=VALUE")
    return out


def _emit(payload: Dict[str, Any], kind: str, fmt: str, output: Optional[str]) -> None:
    """Write a result as json/csv/txt to ``output`` or print it."""
    if fmt == "json":
        if output:
            ReportUtils.to_json_enhanced(output, payload)
            print(f"JSON report saved to: {output}")
        else:
            print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if fmt == "csv":
        if not output:
            raise PinusError("--format csv needs --output")
        if kind == "evaluation":
            ReportUtils.to_csv_evaluation(payload, output)
        elif kind == "batch":
            ReportUtils.to_csv_classifications(payload["results"], output)
        else:
            ReportUtils.to_csv_classifications([payload], output)
        print(f"CSV report saved to: {output}")
        return

    if kind == "evaluation":
        text = SummaryUtils.create_evaluation_report(payload)
    elif kind == "batch":
        text = SummaryUtils.create_batch_report(payload)
    else:
        text = SummaryUtils.create_classification_report(payload)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"Report saved to: {output}")
    else:
        print(text)


def _output_for(base: Optional[str], kind: str, several: bool) -> Optional[str]:
    if base is None or not several:
        return base
    p = Path(base)
    return str(p.with_name(f"{p.stem}_{kind}{p.suffix}"))


# -----------------------------
# CLI
# -----------------------------
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Pinus Hybrid: Douglas Fir / White Pine classification from trunk diameter and height, "
            "combining a KNN vote with certainty-factor rules"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify one tree (k chosen from the training-set size)
  pinus_hybrid training.csv --diameter 0.28 --height 5.5

  # Fixed k, JSON output
  pinus_hybrid training.csv --diameter 0.28 --height 5.5 --k 5 --format json

  # Blend in visual descriptors
  pinus_hybrid training.csv -d 0.3 -H 5 --visual bark_texture=0.8,leaf_density=0.2,branch_pattern=0.9

  # Classify a whole test file and save a CSV
  pinus_hybrid training.csv --test-file test.csv --format csv -o predictions.csv

  # In-sample accuracy
  pinus_hybrid training.csv --evaluate
        """,
    )

    parser.add_argument("training", help="Training data file (CSV or JSON)")

    # Single classification
    parser.add_argument("--diameter", "-d", type=float, help="Trunk diameter of the tree to classify")
    parser.add_argument("--height", "-H", type=float, help="Height of the tree to classify")

    # KNN
    parser.add_argument("--k", type=int, help="Number of neighbors (auto-selected if omitted)")
    parser.add_argument("--strict-k", action="store_true",
                        help="Reject k larger than the training set instead of using every sample")
    parser.add_argument("--neighbor-count-confidence", action="store_true",
                        help="Divide votes by the neighbors found rather than the requested k")

    # Visual scores
    visual = parser.add_mutually_exclusive_group()
    visual.add_argument("--visual", type=_parse_pairs,
                        help="Visual descriptors, e.g. bark_texture=0.8,leaf_density=0.2,branch_pattern=0.9")
    visual.add_argument("--visual-scores", type=_parse_pairs,
                        help='Per-class visual scores, e.g. "Douglas Fir=0.7,White Pine=0.3"')

    # Batch / evaluation
    parser.add_argument("--test-file", help="Classify every point in this CSV/JSON file")
    parser.add_argument("--evaluate", action="store_true",
                        help="Report in-sample accuracy over the training set")

    # Output
    parser.add_argument("--format", choices=["json", "csv", "txt"], default="txt",
                        help="Output format (default: txt)")
    parser.add_argument("--output", "-o", help="Write the report here instead of stdout")
    parser.add_argument("--log-file", help="Also write debug logs to this file")
    parser.add_argument("--version", action="version", version=f"pinus_hybrid version {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING", log_file=args.log_file)

    single = args.diameter is not None or args.height is not None
    if single and (args.diameter is None or args.height is None):
        parser.error("--diameter and --height must be given together")
    if (args.visual or args.visual_scores) and not single:
        parser.error("--visual/--visual-scores need --diameter and --height")
    if not (single or args.test_file or args.evaluate):
        parser.error("nothing to do: give --diameter/--height, --test-file or --evaluate")

    tasks: List[str] = []
    if single:
        tasks.append("single")
    if args.test_file:
        tasks.append("batch")
    if args.evaluate:
        tasks.append("evaluation")
    several = len(tasks) > 1

    try:
        knn_config = KNNConfig(
            strict_k=args.strict_k,
            confidence_denominator=(
                ConfidenceDenominator.NEIGHBOR_COUNT if args.neighbor_count_confidence
                else ConfidenceDenominator.REQUESTED_K
            ),
        )
        training = load_training_set(args.training)
        if args.verbose:
            print(f"Loaded {len(training)} training sample(s) from {args.training}")
        engine = HybridClassifier(training, knn_config)

        if single:
            point = QueryPoint(args.diameter, args.height)
            if args.visual:
                result = engine.classify_with_visual_features(
                    point, VisualFeatures.from_mapping(args.visual), k=args.k
                )
            elif args.visual_scores:
                result = engine.classify_with_visual_features(point, args.visual_scores, k=args.k)
            else:
                result = engine.classify(point, k=args.k)
            _emit(result.to_dict(), "single", args.format, _output_for(args.output, "single", several))

        if args.test_file:
            points = load_query_points(args.test_file)
            batch = engine.classify_batch(points, k=args.k)
            _emit(batch.to_dict(), "batch", args.format, _output_for(args.output, "batch", several))

        if args.evaluate:
            report = engine.evaluate(k=args.k)
            _emit(report.to_dict(), "evaluation", args.format, _output_for(args.output, "evaluation", several))

    except PinusError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
