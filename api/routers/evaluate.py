"""
Router: POST /evaluate
Parsuje tekst i ewaluuje go raz z podanymi zmiennymi.
"""
import math

from fastapi import APIRouter, Depends

from adapters.evaluator.float_evaluator import FloatEvaluator
from adapters.expression_parser.descent_parser import DescentExpressionParser
from api.dependencies import get_evaluator, get_parser
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse, responses={422: {"model": ErrorResponse}})
async def evaluate_text(
    body: EvaluateRequest,
    parser: DescentExpressionParser = Depends(get_parser),
    evaluator: FloatEvaluator = Depends(get_evaluator),
) -> EvaluateResponse:
    value = evaluator.eval_expr(parser.parse(body.text), body.vars)
    # JSON nie ma NaN/inf
    if not math.isfinite(value):
        return EvaluateResponse(value=None, finite=False)
    return EvaluateResponse(value=value, finite=True)
