"""
Router: POST /parse
Zwraca drzewo wyrażenia dla tekstu funkcji.
"""
from fastapi import APIRouter, Depends

from adapters.expression_parser.descent_parser import DescentExpressionParser
from api.dependencies import get_parser
from api.schemas import ErrorResponse, ParseRequest, ParseResponse

router = APIRouter(prefix="/parse", tags=["parse"])


@router.post("", response_model=ParseResponse, responses={422: {"model": ErrorResponse}})
async def parse_text(
    body: ParseRequest,
    parser: DescentExpressionParser = Depends(get_parser),
) -> ParseResponse:
    return ParseResponse(text=body.text, expr=parser.parse(body.text))
