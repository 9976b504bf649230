import math

import pytest

from credit_score.preprocessing import (
    CreditMix,
    PaymentOfMinAmount,
    apply_binning,
    encode_credit_mix,
    encode_features,
    encode_payment_of_min_amount,
    encode_record,
    log_transform,
    parse_credit_history_age,
    to_float,
)
from credit_score.settings import FEATURE_ORDER


# ========= Categorical two-hot encodings =========
@pytest.mark.parametrize("value, expected", [
    ("Good", (1.0, 0.0)),
    ("Standard", (0.0, 1.0)),
    ("  Good ", (1.0, 0.0)),
    ("Bad", (0.0, 0.0)),
    ("_", (0.0, 0.0)),
    ("", (0.0, 0.0)),
    (None, (0.0, 0.0)),
    ("good", (0.0, 0.0)),
    ("Excellent", (0.0, 0.0)),
])
def test_credit_mix_two_hot(value, expected):
    assert encode_credit_mix(value) == expected


@pytest.mark.parametrize("value, expected", [
    ("No", (1.0, 0.0)),
    ("Yes", (0.0, 1.0)),
    (" Yes\n", (0.0, 1.0)),
    ("NM", (0.0, 0.0)),
    ("NotMentioned", (0.0, 0.0)),
    ("", (0.0, 0.0)),
    (None, (0.0, 0.0)),
])
def test_payment_of_min_amount_two_hot(value, expected):
    assert encode_payment_of_min_amount(value) == expected


def test_enum_parsing_falls_back_to_unrecognized_member():
    assert CreditMix.parse("Bad") is CreditMix.BAD
    assert CreditMix.parse("_") is CreditMix.UNKNOWN
    assert PaymentOfMinAmount.parse("maybe") is PaymentOfMinAmount.NOT_MENTIONED


# ========= Numeric coercion =========
@pytest.mark.parametrize("value, expected", [
    (None, 0.0),
    ("", 0.0),
    ("abc", 0.0),
    ("12.5", 12.5),
    (" 7 ", 7.0),
    (3, 3.0),
    (float("nan"), 0.0),
    ("inf", 0.0),
    ([1, 2], 0.0),
    (10**400, 0.0),
    ("1e400", 0.0),
])
def test_to_float(value, expected):
    assert to_float(value) == expected


# ========= Binning =========
@pytest.mark.parametrize("value, expected", [
    (0, 0.0),
    (-5, 0.0),
    (3.7, 3.0),
    (10, 10.0),
    (10.5, 11.0),
    (50, 11.0),
    ("abc", 0.0),
    ("4", 4.0),
    (None, 0.0),
])
def test_apply_binning(value, expected):
    assert apply_binning(value) == expected


def test_apply_binning_custom_max():
    assert apply_binning(6, max_bin=5) == 6.0
    assert apply_binning(5, max_bin=5) == 5.0


# ========= Credit history age =========
@pytest.mark.parametrize("value, expected", [
    ("31 Years and 6 Months", 378.0),
    ("0 Years and 0 Months", 0.0),
    ("", 0.0),
    (None, 0.0),
    (0, 0.0),
    ("5 Months", 5.0),
    ("2 Years", 24.0),
    ("2 years and 1 month", 25.0),
    ("NA", 0.0),
    (120, 120.0),
    ("900 Years and 0 Months", 10800.0),
    ("9" * 320 + " Years", 0.0),
    ("9" * 5000 + " Years and 3 Months", 0.0),
    ("2 Years and " + "9" * 320 + " Months", 0.0),
    (10**400, 0.0),
])
def test_parse_credit_history_age(value, expected):
    assert parse_credit_history_age(value) == expected


# ========= Log transform =========
def test_log_transform_is_plain_natural_log():
    assert log_transform(0) == 0.0
    assert log_transform(-3) == 0.0
    assert log_transform("abc") == 0.0
    assert log_transform(math.e) == pytest.approx(1.0)
    assert log_transform(1) == 0.0  # ln(1), not ln(2)


# ========= Full record =========
def test_encode_record_matches_model_schema(sample_record):
    vector = encode_record(sample_record)
    expected = [
        0.0, 1.0, 1.0, 0.0, 4.0, 6.0,
        3359.41, 23, 11.5, 502.38, 378.0,
        math.log(39628.99), math.log(7), math.log(3), math.log(35.1),
    ]
    assert len(vector) == len(FEATURE_ORDER) == 15
    assert vector == pytest.approx(expected)


def test_encode_record_names_every_feature(sample_record):
    assert set(encode_features(sample_record)) == set(FEATURE_ORDER)


def test_encode_record_never_fails_on_empty_or_garbage_input():
    assert encode_record({}) == [0.0] * 15

    garbage = {name: "???" for name in (
        "Annual_Income", "Monthly_Inhand_Salary", "Num_Bank_Accounts",
        "Credit_History_Age", "Credit_Mix", "Payment_of_Min_Amount",
    )}
    assert encode_record(garbage) == [0.0] * 15


def test_encode_record_accepts_numeric_strings(sample_record):
    as_strings = {k: str(v) for k, v in sample_record.items()}
    assert encode_record(as_strings) == pytest.approx(encode_record(sample_record))


def test_encode_record_survives_huge_numbers():
    huge = 10**400
    record = {name: huge for name in (
        "Annual_Income", "Monthly_Inhand_Salary", "Total_EMI_per_month",
        "Interest_Rate", "Num_Bank_Accounts", "Num_Credit_Card",
        "Num_Credit_Inquiries", "Delay_from_due_date", "Changed_Credit_Limit",
        "Outstanding_Debt", "Credit_History_Age",
    )}
    vector = encode_record(record)
    assert vector == [0.0] * 15
    assert all(math.isfinite(v) for v in vector)
