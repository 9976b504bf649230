
# credit_score/decision.py
"""
Turns the model's raw class scores into a verdict.

Scores are softmax-normalized, then a risk-first rule applies: once the Poor
probability reaches POOR_THRESHOLD the verdict is Poor whatever the other two
classes score. Below the threshold the better of Good and Standard wins.
"""
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from .errors import InvalidModelOutput
from .settings import CLASS_LABELS, POOR_CLASS_INDEX, POOR_THRESHOLD


@dataclass(frozen=True)
class PredictionResult:
    label: str
    class_index: int
    probabilities: Tuple[float, float, float]

    def probabilities_by_label(self) -> Dict[str, float]:
        return dict(zip(CLASS_LABELS, self.probabilities))


def validate_scores(raw_scores) -> np.ndarray:
    try:
        scores = np.asarray(raw_scores, dtype=np.float64).ravel()
    except (TypeError, ValueError) as exc:
        raise InvalidModelOutput(f"Model scores are not numeric: {exc}") from exc
    if scores.size != len(CLASS_LABELS):
        raise InvalidModelOutput(
            f"Expected {len(CLASS_LABELS)} class scores, got {scores.size}"
        )
    if not np.all(np.isfinite(scores)):
        raise InvalidModelOutput(f"Model scores contain non-finite values: {scores.tolist()}")
    return scores


def softmax(raw_scores) -> Tuple[float, float, float]:
    scores = validate_scores(raw_scores)
    # shift by the max so exp() cannot overflow
    exps = np.exp(scores - scores.max())
    probs = exps / exps.sum()
    return tuple(float(p) for p in probs)


def classify(probabilities: Sequence[float], threshold: float = POOR_THRESHOLD) -> int:
    if probabilities[POOR_CLASS_INDEX] >= threshold:
        return POOR_CLASS_INDEX

    # Poor already failed the risk gate and cannot win the arg-max
    best_idx, best_val = -1, -1.0
    for idx, prob in enumerate(probabilities):
        if idx == POOR_CLASS_INDEX:
            continue
        if prob > best_val:
            best_idx, best_val = idx, prob
    return best_idx


def decide(raw_scores) -> PredictionResult:
    probabilities = softmax(raw_scores)
    class_index = classify(probabilities)
    return PredictionResult(
        label=CLASS_LABELS[class_index],
        class_index=class_index,
        probabilities=probabilities,
    )
