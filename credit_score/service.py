
# credit_score/service.py
import logging
from typing import Any, Mapping, Optional

from .decision import PredictionResult, decide
from .model_loader import ScoringModel, get_model
from .preprocessing import encode_record

logger = logging.getLogger(__name__)


def predict_credit_score(raw: Mapping[str, Any],
                         model: Optional[ScoringModel] = None) -> PredictionResult:
    """Encode a raw form record, score it and apply the risk-first rule."""
    vector = encode_record(raw)
    logger.debug("Encoded features: %s", vector)

    model = model or get_model()
    raw_scores = model.score(vector)
    result = decide(raw_scores)

    logger.info(
        "Prediction %s (class %d), probabilities %s",
        result.label, result.class_index, result.probabilities_by_label(),
    )
    return result
