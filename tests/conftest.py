import os
import sys

import numpy as np
import pandas as pd
import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from credit_score import model_loader
from credit_score.settings import CLASS_LABELS, FEATURE_ORDER


class FakeModel(model_loader.ScoringModel):
    """Returns fixed raw scores and remembers what it was asked to score."""

    backend = "fake"

    def __init__(self, scores=(0.0, 0.0, 0.0)):
        super().__init__(path="<memory>")
        self.scores = np.asarray(scores, dtype=np.float32)
        self.seen = []

    def raw_scores(self, frame):
        self.seen.append(frame.iloc[0].tolist())
        return self.scores.reshape(1, -1)


@pytest.fixture(autouse=True)
def fresh_model():
    """Every test starts without a cached model handle."""
    model_loader.reset_model()
    yield
    model_loader.reset_model()


@pytest.fixture
def sample_record():
    return {
        "Annual_Income": 39628.99,
        "Monthly_Inhand_Salary": 3359.41,
        "Total_EMI_per_month": 35.1,
        "Interest_Rate": 7,
        "Num_Bank_Accounts": 4,
        "Num_Credit_Card": 6,
        "Num_Credit_Inquiries": 3,
        "Delay_from_due_date": 23,
        "Changed_Credit_Limit": 11.5,
        "Outstanding_Debt": 502.38,
        "Credit_History_Age": "31 Years and 6 Months",
        "Credit_Mix": "Standard",
        "Payment_of_Min_Amount": "No",
    }


@pytest.fixture(scope="session")
def trained_estimator():
    """A small multinomial logistic regression over the 15 model features."""
    from sklearn.linear_model import LogisticRegression

    rng = np.random.default_rng(42)
    X = pd.DataFrame(rng.normal(size=(90, len(FEATURE_ORDER))), columns=FEATURE_ORDER)
    X = X.astype("float32")
    y = np.array(CLASS_LABELS * 30)
    return LogisticRegression(max_iter=500).fit(X, y)


@pytest.fixture
def joblib_model_path(tmp_path, trained_estimator, monkeypatch):
    import joblib

    path = tmp_path / "model.joblib"
    joblib.dump(trained_estimator, path)
    monkeypatch.setenv("CREDIT_SCORE_MODEL_PATH", str(path))
    return str(path)
