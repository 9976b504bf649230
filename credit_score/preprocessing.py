
# credit_score/preprocessing.py
"""
Feature encoding for the credit score model.

Maps a raw form record (13 human-entered fields) to the 15 features the model
was trained on, in FEATURE_ORDER. Encoding is total: missing, non-numeric or
malformed fields fall back to 0 instead of raising.
"""
import math
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from .settings import FEATURE_ORDER, MAX_BIN

_YEARS_RE = re.compile(r"(\d+)\s*Year", re.IGNORECASE)
_MONTHS_RE = re.compile(r"(\d+)\s*Month", re.IGNORECASE)


class CreditMix(str, Enum):
    GOOD = "Good"
    STANDARD = "Standard"
    BAD = "Bad"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "CreditMix":
        text = _clean_text(value)
        for member in (cls.GOOD, cls.STANDARD, cls.BAD):
            if text == member.value:
                return member
        return cls.UNKNOWN


class PaymentOfMinAmount(str, Enum):
    YES = "Yes"
    NO = "No"
    NOT_MENTIONED = "NM"

    @classmethod
    def parse(cls, value: Any) -> "PaymentOfMinAmount":
        text = _clean_text(value)
        if text == cls.YES.value:
            return cls.YES
        if text == cls.NO.value:
            return cls.NO
        return cls.NOT_MENTIONED


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def to_float(value: Any) -> float:
    """Coerce a form value to float; None, blanks, garbage and inf/nan give 0.0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def apply_binning(value: Any, max_bin: int = MAX_BIN) -> float:
    """
    Bucket a count into 0..max_bin+1.

    0 means none or invalid, max_bin + 1 means "more than max_bin".
    """
    number = to_float(value)
    if number <= 0:
        return 0.0
    if number > max_bin:
        return max_bin + 1.0
    return float(math.floor(number))


def parse_credit_history_age(value: Any) -> float:
    """'31 Years and 6 Months' -> 378.0 (total months)."""
    if not value:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return to_float(value)

    text = str(value)
    years_match = _YEARS_RE.search(text)
    months_match = _MONTHS_RE.search(text)
    # float() takes digit runs of any length; overflow ends up as inf
    years = float(years_match.group(1)) if years_match else 0.0
    months = float(months_match.group(1)) if months_match else 0.0
    total = years * 12 + months
    if not math.isfinite(total):
        return 0.0
    return total


def log_transform(value: Any) -> float:
    # Plain ln, not log1p: must match the transform used at training time
    number = to_float(value)
    if number > 0:
        return math.log(number)
    return 0.0


def encode_credit_mix(value: Any) -> Tuple[float, float]:
    """Two-hot (Good, Standard); Bad and unknown values collapse to (0, 0)."""
    mix = CreditMix.parse(value)
    return (
        1.0 if mix is CreditMix.GOOD else 0.0,
        1.0 if mix is CreditMix.STANDARD else 0.0,
    )


def encode_payment_of_min_amount(value: Any) -> Tuple[float, float]:
    """Two-hot (No, Yes); NM and unknown values collapse to (0, 0)."""
    payment = PaymentOfMinAmount.parse(value)
    return (
        1.0 if payment is PaymentOfMinAmount.NO else 0.0,
        1.0 if payment is PaymentOfMinAmount.YES else 0.0,
    )


def encode_features(raw: Mapping[str, Any]) -> Dict[str, float]:
    """Named features for one raw record."""
    processed = {
        "Monthly_Inhand_Salary": to_float(raw.get("Monthly_Inhand_Salary")),
        "Delay_from_due_date": to_float(raw.get("Delay_from_due_date")),
        "Changed_Credit_Limit": to_float(raw.get("Changed_Credit_Limit")),
        "Outstanding_Debt": to_float(raw.get("Outstanding_Debt")),
        "Credit_History_Age": parse_credit_history_age(raw.get("Credit_History_Age")),
        "Annual_Income_log": log_transform(raw.get("Annual_Income")),
        "Interest_Rate_log": log_transform(raw.get("Interest_Rate")),
        "Num_Credit_Inquiries_log": log_transform(raw.get("Num_Credit_Inquiries")),
        "Total_EMI_per_month_log": log_transform(raw.get("Total_EMI_per_month")),
        "Num_Bank_Accounts_Bin": apply_binning(raw.get("Num_Bank_Accounts")),
        "Num_Credit_Card_Bin": apply_binning(raw.get("Num_Credit_Card")),
    }
    processed["Credit_Mix_Good"], processed["Credit_Mix_Standard"] = \
        encode_credit_mix(raw.get("Credit_Mix"))
    processed["Payment_of_Min_Amount_No"], processed["Payment_of_Min_Amount_Yes"] = \
        encode_payment_of_min_amount(raw.get("Payment_of_Min_Amount"))
    return processed


def encode_record(raw: Mapping[str, Any]) -> List[float]:
    """Feature vector in the exact column order the model expects."""
    processed = encode_features(raw)
    return [processed.get(name, 0.0) for name in FEATURE_ORDER]
