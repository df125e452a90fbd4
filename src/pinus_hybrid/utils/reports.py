# src/pinus_hybrid/utils/reports.py
from __future__ import annotations
from typing import Dict, Any, List
import json
from pathlib import Path
import time
import sys
import csv

from ..__version__ import __version__

_CLASSIFICATION_COLUMNS = [
    "id",
    "diameter",
    "height",
    "k",
    "knn_prediction",
    "knn_confidence",
    "expert_prediction",
    "expert_confidence",
    "predicted_label",
    "confidence",
    "true_label",
]

_EVALUATION_COLUMNS = [
    "id",
    "knn_prediction",
    "expert_prediction",
    "expert_confidence",
    "final_confidence",
    "final_prediction",
    "true_label",
    "correct",
]


class ReportUtils:
    @staticmethod
    def to_json_enhanced(path: str, payload: Dict[str, Any]) -> None:
        out = {
            **payload,
            "metadata": {
                "library": "pinus_hybrid",
                "version": __version__,
                "generated_at": time.strftime("%Y-%m-%d %H:%M:%S"),
                "python_version": f"{sys.version_info.major}.{sys.version_info.minor}",
            },
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(out, f, ensure_ascii=False, indent=2)

    @staticmethod
    def classification_row(result: Dict[str, Any]) -> Dict[str, Any]:
        """Flatten a ClassificationResult.to_dict() into one CSV row."""
        knn = result["knn"]
        expert = result["expert"]
        return {
            "id": result.get("id") or "",
            "diameter": result["diameter"],
            "height": result["height"],
            "k": result["k"],
            "knn_prediction": knn["predicted_label"],
            "knn_confidence": f"{knn['confidence']:.4f}",
            "expert_prediction": expert["predicted_label"],
            "expert_confidence": f"{expert['confidence']:.4f}",
            "predicted_label": result["predicted_label"],
            "confidence": f"{result['confidence']:.4f}",
            "true_label": result.get("true_label", ""),
        }

    @staticmethod
    def to_csv_classifications(results: List[Dict[str, Any]], output_path: str) -> None:
        if not results:
            Path(output_path).write_text("", encoding="utf-8")
            return
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=_CLASSIFICATION_COLUMNS)
            w.writeheader()
            for r in results:
                w.writerow(ReportUtils.classification_row(r))

    @staticmethod
    def to_csv_evaluation(report: Dict[str, Any], output_path: str) -> None:
        rows = report.get("rows", [])
        if not rows:
            Path(output_path).write_text("", encoding="utf-8")
            return
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=_EVALUATION_COLUMNS)
            w.writeheader()
            for r in rows:
                w.writerow(
                    {
                        **{k: r[k] for k in _EVALUATION_COLUMNS},
                        "expert_confidence": f"{r['expert_confidence']:.4f}",
                        "final_confidence": f"{r['final_confidence']:.4f}",
                    }
                )
