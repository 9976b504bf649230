
# credit_score/model_loader.py
import logging
import os
import threading
from typing import List, Optional, Sequence

import joblib
import numpy as np
import onnxruntime as ort
import pandas as pd

from . import settings
from .errors import InvalidModelOutput, ModelUnavailable
from .settings import CLASS_LABELS, FEATURE_ORDER, N_FEATURES

logger = logging.getLogger(__name__)

_model = None
_model_lock = threading.Lock()


def to_dataframe(vectors: Sequence[Sequence[float]]) -> pd.DataFrame:
    """vectors: encoded rows, each in FEATURE_ORDER"""
    df = pd.DataFrame([list(v) for v in vectors], columns=FEATURE_ORDER)
    return df.astype("float32")


class ScoringModel:
    """Opaque classifier: one 15-feature row in, three raw class scores out."""

    backend = "unknown"

    def __init__(self, path: str):
        self.path = path

    def raw_scores(self, frame: pd.DataFrame) -> np.ndarray:
        raise NotImplementedError

    def score(self, vector: Sequence[float]) -> np.ndarray:
        if len(vector) != N_FEATURES:
            raise ValueError(f"Expected {N_FEATURES} features, got {len(vector)}")
        frame = to_dataframe([vector])
        try:
            return self.raw_scores(frame)
        except InvalidModelOutput:
            raise
        except Exception as exc:
            raise ModelUnavailable(f"Model execution failed: {exc}") from exc


def _is_numeric_array(value) -> bool:
    return isinstance(value, np.ndarray) and np.issubdtype(value.dtype, np.number)


def select_score_output(output_names: List[str], outputs: list,
                        preferred: Optional[str] = None) -> np.ndarray:
    """
    Pick the output tensor holding the per-class scores.

    An explicitly configured name always wins. Otherwise a single numeric
    output is used as is; with several, the second declared one is taken
    (converted classifiers emit the label first, then the scores).
    """
    if preferred is not None:
        if preferred not in output_names:
            raise InvalidModelOutput(
                f"Output {preferred!r} not found; model declares {output_names}"
            )
        value = outputs[output_names.index(preferred)]
        if not _is_numeric_array(value):
            raise InvalidModelOutput(f"Output {preferred!r} is not a numeric array")
        return value

    numeric = [i for i, value in enumerate(outputs) if _is_numeric_array(value)]
    if not numeric:
        raise InvalidModelOutput(f"No numeric output among {output_names}")
    if len(numeric) == 1:
        return outputs[numeric[0]]
    if not _is_numeric_array(outputs[1]):
        raise InvalidModelOutput(
            f"Second declared output {output_names[1]!r} is not a numeric array; "
            "set CREDIT_SCORE_MODEL_OUTPUT to choose one"
        )
    return outputs[1]


class OnnxScoringModel(ScoringModel):
    backend = "onnx"

    def __init__(self, path: str, input_name: Optional[str] = None,
                 output_name: Optional[str] = None):
        super().__init__(path)
        self.session = ort.InferenceSession(path, providers=["CPUExecutionProvider"])
        inputs = [i.name for i in self.session.get_inputs()]
        if input_name is not None and input_name not in inputs:
            raise ModelUnavailable(f"Input {input_name!r} not found; model declares {inputs}")
        self.input_name = input_name or inputs[0]
        self.output_names = [o.name for o in self.session.get_outputs()]
        self.output_name = output_name

    def raw_scores(self, frame: pd.DataFrame) -> np.ndarray:
        tensor = frame.to_numpy(dtype=np.float32)
        outputs = self.session.run(None, {self.input_name: tensor})
        return select_score_output(self.output_names, outputs, self.output_name)


class EstimatorScoringModel(ScoringModel):
    """scikit-learn style classifier persisted with joblib."""

    backend = "joblib"

    def __init__(self, path: str, estimator=None):
        super().__init__(path)
        self.estimator = joblib.load(path) if estimator is None else estimator

        if hasattr(self.estimator, "decision_function"):
            self._scores = self.estimator.decision_function
        elif hasattr(self.estimator, "predict_log_proba"):
            # softmax of log-probabilities gives back the probabilities
            self._scores = self.estimator.predict_log_proba
        else:
            raise ModelUnavailable(
                f"{type(self.estimator).__name__} exposes neither decision_function "
                "nor predict_log_proba"
            )

        classes = getattr(self.estimator, "classes_", None)
        if classes is not None and all(isinstance(c, str) for c in classes):
            if tuple(classes) != CLASS_LABELS:
                raise ModelUnavailable(
                    f"Model classes {list(classes)} do not match {list(CLASS_LABELS)}"
                )

    def raw_scores(self, frame: pd.DataFrame) -> np.ndarray:
        if hasattr(self.estimator, "feature_names_in_"):
            X = frame
        else:
            X = frame.to_numpy(dtype=np.float32)
        return np.asarray(self._scores(X))


def load_model(path: Optional[str] = None) -> ScoringModel:
    path = path or settings.model_path()
    if not os.path.exists(path):
        raise ModelUnavailable(f"Model file not found at {path}")

    try:
        if path.lower().endswith(".onnx"):
            model = OnnxScoringModel(
                path,
                input_name=settings.model_input_name(),
                output_name=settings.model_output_name(),
            )
        else:
            model = EstimatorScoringModel(path)
    except ModelUnavailable:
        raise
    except Exception as exc:
        raise ModelUnavailable(f"Could not load model from {path}: {exc}") from exc

    logger.info("Loaded %s model from %s", model.backend, path)
    return model


def get_model() -> ScoringModel:
    global _model
    if _model is None:
        with _model_lock:
            # another thread may have finished the load while we waited
            if _model is None:
                _model = load_model()
    return _model


def is_model_loaded() -> bool:
    return _model is not None


def reset_model():
    global _model
    with _model_lock:
        _model = None
