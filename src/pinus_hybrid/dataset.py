# src/pinus_hybrid/dataset.py
"""
Training samples, query points and the file loaders that feed them.

The engine never owns storage: a :class:`TrainingSet` is an immutable,
ordered snapshot handed to every operation.
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
import csv
import json
import logging
import math

import numpy as np

from .exceptions import DatasetLoadError, ValidationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Accepted header spellings, lower-cased. Older exports use IdData,
# Diameter, Tinggi and Jenis.
_COLUMN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "sample_id", "iddata"),
    "diameter": ("diameter",),
    "height": ("height", "tinggi"),
    "label": ("label", "species", "jenis"),
}


def _to_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(out):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    return out


@dataclass(frozen=True)
class QueryPoint:
    """A measurement to classify. ``label`` and ``point_id`` are optional."""

    diameter: float
    height: float
    label: Optional[str] = None
    point_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "diameter", _to_float(self.diameter, "diameter"))
        object.__setattr__(self, "height", _to_float(self.height, "height"))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.diameter, self.height)


@dataclass(frozen=True)
class TrainingSample:
    """A labeled (diameter, height) observation."""

    sample_id: str
    diameter: float
    height: float
    label: str

    def __post_init__(self):
        d = _to_float(self.diameter, "diameter")
        h = _to_float(self.height, "height")
        if d <= 0:
            raise ValidationError(f"Sample {self.sample_id}: diameter must be > 0, got {d}")
        if h <= 0:
            raise ValidationError(f"Sample {self.sample_id}: height must be > 0, got {h}")
        label = str(self.label).strip() if self.label is not None else ""
        if not label:
            raise ValidationError(f"Sample {self.sample_id}: label is required")
        object.__setattr__(self, "sample_id", str(self.sample_id))
        object.__setattr__(self, "diameter", d)
        object.__setattr__(self, "height", h)
        object.__setattr__(self, "label", label)

    def as_query(self) -> QueryPoint:
        return QueryPoint(self.diameter, self.height, label=self.label, point_id=self.sample_id)


@dataclass(frozen=True)
class TrainingSet:
    """Immutable, ordered collection of training samples."""

    samples: Tuple[TrainingSample, ...] = ()
    _features: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        samples = tuple(self.samples)
        for s in samples:
            if not isinstance(s, TrainingSample):
                raise ValidationError(f"Expected TrainingSample, got {type(s).__name__}")
        feats = np.array([[s.diameter, s.height] for s in samples], dtype=np.float64).reshape(-1, 2)
        feats.setflags(write=False)
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "_features", feats)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "TrainingSet":
        """
        Build a training set from tuples or mappings.

        Tuples are ``(diameter, height, label)`` or ``(id, diameter, height, label)``;
        mappings use the same keys as the CSV loader.
        """
        samples = []
        for i, rec in enumerate(records, start=1):
            if isinstance(rec, TrainingSample):
                samples.append(rec)
            elif isinstance(rec, Mapping):
                samples.append(_sample_from_mapping(rec, i))
            elif len(rec) == 3:
                d, h, label = rec
                samples.append(TrainingSample(str(i), d, h, label))
            elif len(rec) == 4:
                sid, d, h, label = rec
                samples.append(TrainingSample(sid, d, h, label))
            else:
                raise ValidationError(f"Record {i}: expected 3 or 4 fields, got {len(rec)}")
        return cls(tuple(samples))

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[TrainingSample]:
        return iter(self.samples)

    def __getitem__(self, idx: int) -> TrainingSample:
        return self.samples[idx]

    @property
    def labels(self) -> List[str]:
        return [s.label for s in self.samples]

    def features(self) -> np.ndarray:
        """Read-only ``(n, 2)`` array of (diameter, height) in sample order."""
        return self._features

    def label_counts(self) -> Dict[str, int]:
        return dict(Counter(self.labels))


# --------------------------
# LOADERS
# --------------------------
def _resolve_columns(keys: Iterable[str]) -> Dict[str, str]:
    lowered = {str(k).strip().lower(): k for k in keys if k is not None}
    out: Dict[str, str] = {}
    for canonical, aliases in _COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in lowered:
                out[canonical] = lowered[alias]
                break
    return out


def _sample_from_mapping(rec: Mapping[str, Any], row: int) -> TrainingSample:
    cols = _resolve_columns(rec.keys())
    missing = [c for c in ("diameter", "height", "label") if c not in cols]
    if missing:
        raise ValidationError(f"Record {row}: missing field(s) {', '.join(missing)}")
    sid = rec.get(cols["id"]) if "id" in cols else None
    if sid is None or str(sid).strip() == "":
        sid = str(row)
    return TrainingSample(sid, rec[cols["diameter"]], rec[cols["height"]], rec[cols["label"]])


def _query_from_mapping(rec: Mapping[str, Any], row: int) -> QueryPoint:
    cols = _resolve_columns(rec.keys())
    missing = [c for c in ("diameter", "height") if c not in cols]
    if missing:
        raise ValidationError(f"Record {row}: missing field(s) {', '.join(missing)}")
    sid = rec.get(cols["id"]) if "id" in cols else None
    if sid is None or str(sid).strip() == "":
        sid = str(row)
    label = rec.get(cols["label"]) if "label" in cols else None
    if label is not None:
        label = str(label).strip() or None
    return QueryPoint(rec[cols["diameter"]], rec[cols["height"]], label=label, point_id=str(sid))


def _read_records(path: PathLike) -> List[Dict[str, Any]]:
    p = Path(path)
    if not p.exists():
        raise DatasetLoadError("File not found", str(p))
    if not p.is_file():
        raise DatasetLoadError("Not a file", str(p))

    try:
        text = p.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Cannot read file: {e}", str(p)) from e

    if p.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DatasetLoadError(f"Invalid JSON: {e.msg}", str(p)) from e
        if isinstance(data, dict) and "samples" in data:
            data = data["samples"]
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise DatasetLoadError("JSON must be a list of objects", str(p))
        return data

    reader = csv.DictReader(text.splitlines())
    if not reader.fieldnames:
        raise DatasetLoadError("CSV has no header row", str(p))
    return [dict(r) for r in reader]


def _load(path: PathLike, build) -> list:
    records = _read_records(path)
    out = []
    # row 1 is the header in CSV; report data rows 1-based for both formats
    for i, rec in enumerate(records, start=1):
        try:
            out.append(build(rec, i))
        except ValidationError as e:
            raise DatasetLoadError(str(e), str(path), i) from e
    return out


def load_training_set(path: PathLike) -> TrainingSet:
    """Load a training set from a CSV or JSON file."""
    samples = _load(path, _sample_from_mapping)
    ts = TrainingSet(tuple(samples))
    logger.info("Loaded %d training samples from %s", len(ts), path)
    return ts


def load_query_points(path: PathLike) -> List[QueryPoint]:
    """Load test points from a CSV or JSON file; labels are optional."""
    points = _load(path, _query_from_mapping)
    logger.info("Loaded %d query points from %s", len(points), path)
    return points


def as_query_points(points: Sequence[Any]) -> List[QueryPoint]:
    """Coerce tuples, mappings and samples into QueryPoints."""
    out: List[QueryPoint] = []
    for i, p in enumerate(points, start=1):
        if isinstance(p, QueryPoint):
            out.append(p)
        elif isinstance(p, TrainingSample):
            out.append(p.as_query())
        elif isinstance(p, Mapping):
            out.append(_query_from_mapping(p, i))
        else:
            d, h = p
            out.append(QueryPoint(d, h, point_id=str(i)))
    return out
