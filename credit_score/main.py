
# credit_score/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from . import settings
from .errors import InvalidModelOutput, MissingInput, ModelUnavailable
from .model_loader import is_model_loaded, reset_model
from .schemas import CreditScoreRequest, HealthResponse, PredictionDetails, PredictResponse
from .service import predict_credit_score

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # model handle lives for the whole process
    reset_model()


app = FastAPI(title="Credit Score Prediction API", lifespan=lifespan)


def _failure(status_code: int, message: str) -> JSONResponse:
    body = PredictResponse(success=False, error=message).to_json()
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(MissingInput)
async def missing_input_handler(request: Request, exc: MissingInput):
    return _failure(400, "No data provided")


@app.exception_handler(ModelUnavailable)
async def model_unavailable_handler(request: Request, exc: ModelUnavailable):
    logger.error("Model unavailable: %s", exc)
    return _failure(500, "Internal Server Error")


@app.exception_handler(InvalidModelOutput)
async def invalid_output_handler(request: Request, exc: InvalidModelOutput):
    logger.error("Invalid model output: %s", exc)
    return _failure(500, "Invalid model output")


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Prediction failed: %s", exc)
    return _failure(500, "Internal Server Error")


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="OK",
        model_loaded=is_model_loaded(),
        risk_threshold=settings.POOR_THRESHOLD,
    )


@app.post("/api/predict")
def predict(payload: Optional[CreditScoreRequest] = Body(None)):
    if payload is None:
        raise MissingInput("No data provided")

    result = predict_credit_score(payload.model_dump())
    response = PredictResponse(
        success=True,
        prediction=result.label,
        class_index=result.class_index,
        details=PredictionDetails(
            risk_threshold_used=settings.POOR_THRESHOLD,
            probabilities=result.probabilities_by_label(),
        ),
    )
    return response.to_json()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
