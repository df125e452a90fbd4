# src/pinus_hybrid/core/species.py
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

DOUGLAS_FIR = "Douglas Fir"
WHITE_PINE = "White Pine"

# Declaration order; every argmax and vote tie resolves towards the front.
CLASS_LABELS: Tuple[str, ...] = (DOUGLAS_FIR, WHITE_PINE)


def declaration_order(extra: Iterable[str] = ()) -> List[str]:
    """Known classes first, then unseen labels in first-appearance order."""
    order = list(CLASS_LABELS)
    for label in extra:
        if label not in order:
            order.append(label)
    return order


def argmax_label(scores: Mapping[str, float], order: Sequence[str]) -> Tuple[str, float]:
    """
    Pick the highest score, breaking ties by position in ``order``.

    Labels missing from ``scores`` count as 0.0.
    """
    if not order:
        raise ValueError("order cannot be empty")
    ranked = sorted(
        enumerate(order),
        key=lambda item: (-float(scores.get(item[1], 0.0)), item[0]),
    )
    best = ranked[0][1]
    return best, float(scores.get(best, 0.0))


def zero_scores(labels: Sequence[str] = CLASS_LABELS) -> Dict[str, float]:
    return {label: 0.0 for label in labels}
