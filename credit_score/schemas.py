
# credit_score/schemas.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CreditScoreRequest(BaseModel):
    # Values are taken as entered; the encoder falls back to 0 for anything unusable
    Annual_Income: Any = Field(None, examples=[39628.99])
    Monthly_Inhand_Salary: Any = Field(None, examples=[3359.41])
    Total_EMI_per_month: Any = Field(None, examples=[35.1])
    Interest_Rate: Any = Field(None, examples=[7])
    Num_Bank_Accounts: Any = Field(None, examples=[4])
    Num_Credit_Card: Any = Field(None, examples=[6])
    Num_Credit_Inquiries: Any = Field(None, examples=[3])
    Delay_from_due_date: Any = Field(None, examples=[23])
    Changed_Credit_Limit: Any = Field(None, examples=[11.5])
    Outstanding_Debt: Any = Field(None, examples=[502.38])
    Credit_History_Age: Any = Field(None, examples=["31 Years and 6 Months"])
    Credit_Mix: Any = Field(None, examples=["Standard"])          # Good | Standard | Bad | _
    Payment_of_Min_Amount: Any = Field(None, examples=["No"])     # Yes | No | NM

    class Config:
        extra = "allow"


class PredictionDetails(BaseModel):
    risk_threshold_used: float
    probabilities: Dict[str, float]   # keyed Good / Poor / Standard


class PredictResponse(BaseModel):
    success: bool
    prediction: Optional[str] = None                       # Good | Standard | Poor
    class_index: Optional[int] = Field(None, alias="classIndex")
    details: Optional[PredictionDetails] = None
    error: Optional[str] = None                            # only when success is false

    class Config:
        populate_by_name = True

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class HealthResponse(BaseModel):
    status: str
    model_loaded: bool
    risk_threshold: float
