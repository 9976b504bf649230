
# credit_score/settings.py
import os

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
ARTIFACTS_DIR = os.path.join(os.path.dirname(PROJECT_ROOT), "artifacts")
DEFAULT_MODEL_PATH = os.path.join(ARTIFACTS_DIR, "model.onnx")

LOG_LEVEL = os.environ.get("CREDIT_SCORE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Class order of the model's raw scores
CLASS_LABELS = ("Good", "Poor", "Standard")
POOR_CLASS_INDEX = 1

# Operating point fixed when the model was tuned; not user-configurable
POOR_THRESHOLD = 0.38059428

# Count features above this go to the overflow bucket (MAX_BIN + 1)
MAX_BIN = 10

FEATURE_ORDER = [
    "Credit_Mix_Good", "Credit_Mix_Standard",
    "Payment_of_Min_Amount_No", "Payment_of_Min_Amount_Yes",
    "Num_Bank_Accounts_Bin", "Num_Credit_Card_Bin",
    "Monthly_Inhand_Salary", "Delay_from_due_date", "Changed_Credit_Limit",
    "Outstanding_Debt", "Credit_History_Age",
    "Annual_Income_log", "Interest_Rate_log",
    "Num_Credit_Inquiries_log", "Total_EMI_per_month_log",
]
N_FEATURES = len(FEATURE_ORDER)


def model_path():
    return os.environ.get("CREDIT_SCORE_MODEL_PATH", DEFAULT_MODEL_PATH)


def model_input_name():
    """Input tensor name; None means the first input the graph declares."""
    return os.environ.get("CREDIT_SCORE_MODEL_INPUT") or None


def model_output_name():
    """Output carrying raw class scores; None means pick it heuristically."""
    return os.environ.get("CREDIT_SCORE_MODEL_OUTPUT") or None
