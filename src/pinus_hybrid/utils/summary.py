# src/pinus_hybrid/utils/summary.py
from __future__ import annotations
from typing import Any, Dict, List


def _fmt_scores(scores: Dict[str, Any], pct: bool = False) -> str:
    if pct:
        return ", ".join(f"{k}: {float(v) * 100:.2f}%" for k, v in scores.items())
    return ", ".join(f"{k}: {v}" if isinstance(v, int) else f"{k}: {float(v):.4f}" for k, v in scores.items())


class SummaryUtils:
    @staticmethod
    def create_classification_report(result: Dict[str, Any]) -> str:
        knn = result["knn"]
        expert = result["expert"]
        lines = []
        lines.append("PINUS HYBRID REPORT")
        lines.append("")
        lines.append("Input")
        if result.get("id"):
            lines.append(f"- Id: {result['id']}")
        lines.append(f"- Diameter: {result['diameter']}")
        lines.append(f"- Height: {result['height']}")
        lines.append("")
        lines.append(f"KNN (k={knn['k']})")
        lines.append(f"- Prediction: {knn['predicted_label']} ({knn['confidence'] * 100:.2f}%)")
        lines.append(f"- Votes: {_fmt_scores(knn['votes'])}")
        for n in knn["neighbors"]:
            lines.append(
                f"  - #{n['id']} d={n['diameter']} h={n['height']} {n['label']} "
                f"dist={n['distance']:.4f}"
            )
        lines.append("")
        lines.append("Certainty factors")
        lines.append(f"- Prediction: {expert['predicted_label']} (CF {expert['confidence']:.2f})")
        lines.append(f"- CF: {_fmt_scores(expert['certainty'])}")
        for label, fired in expert["fired"].items():
            lines.append(f"  - {label}: {', '.join(fired) if fired else 'no rule fired'}")
        lines.append("")
        lines.append("Hybrid")
        lines.append(f"- Scores: {_fmt_scores(result['hybrid_breakdown'])}")
        if result.get("visual_enhanced"):
            lines.append(f"- Visual: {_fmt_scores(result['visual_breakdown'])}")
            lines.append(f"- Final: {_fmt_scores(result['final_breakdown'])}")
        lines.append(f"- Prediction: {result['predicted_label']} ({result['confidence'] * 100:.2f}%)")
        return "\n".join(lines)

    @staticmethod
    def create_batch_report(batch: Dict[str, Any]) -> str:
        summary = batch["summary"]
        lines = []
        lines.append("PINUS HYBRID BATCH REPORT")
        lines.append("")
        lines.append(f"- Training samples: {batch['training_count']}")
        lines.append(f"- Test points: {batch['test_count']}")
        lines.append(f"- K: {batch['k']}")
        lines.append("")
        lines.append("Predictions")
        for r in batch["results"]:
            true = f" (true: {r['true_label']})" if r.get("true_label") else ""
            lines.append(
                f"- {r.get('id') or '?'}: d={r['diameter']} h={r['height']} -> "
                f"{r['predicted_label']} {r['confidence'] * 100:.2f}%{true}"
            )
        lines.append("")
        lines.append("Distribution")
        for label, info in summary["distribution"].items():
            lines.append(f"- {label}: {info['count']} ({info['percent']:.2f}%)")
        lines.append(f"- Mean confidence: {summary['avg_confidence'] * 100:.2f}%")
        if "accuracy" in summary:
            lines.append(f"- Accuracy: {summary['accuracy']:.2f}% ({summary['correct']}/{summary['total']})")
        return "\n".join(lines)

    @staticmethod
    def create_evaluation_report(report: Dict[str, Any]) -> str:
        lines = []
        lines.append("PINUS HYBRID IN-SAMPLE EVALUATION")
        lines.append("")
        rows: List[Dict[str, Any]] = report.get("rows", [])
        for r in rows:
            mark = "ok" if r["correct"] else "MISS"
            lines.append(
                f"- {r['id']}: knn={r['knn_prediction']} cf={r['expert_prediction']} "
                f"({r['expert_confidence']:.2f}) final={r['final_prediction']} "
                f"({r['final_confidence']:.2f}) true={r['true_label']} [{mark}]"
            )
        if rows:
            lines.append("")
        lines.append(f"Accuracy: {report['accuracy']:.2f}% ({report['correct']}/{report['total']}, k={report['k']})")
        lines.append("Note: every sample is also a reference point; this is not a held-out estimate.")
        return "\n".join(lines)
