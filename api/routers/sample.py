"""
Router: POST /sample
Próbkuje funkcję na [start, end) do rysowania wykresu.
"""
from fastapi import APIRouter, Depends

from adapters.domain_sampler.grid_sampler import GridSampler
from adapters.expression_parser.descent_parser import DescentExpressionParser
from adapters.plot_session.session import determine_y_bounds
from api.dependencies import get_parser, get_sampler, get_settings
from api.schemas import ErrorResponse, SampleRequest, SampleResponse
from config import Settings
from contracts import RangeError, ResolutionLimitError

router = APIRouter(prefix="/sample", tags=["sample"])


@router.post("", response_model=SampleResponse, responses={422: {"model": ErrorResponse}})
async def sample_text(
    body: SampleRequest,
    parser: DescentExpressionParser = Depends(get_parser),
    sampler: GridSampler = Depends(get_sampler),
    settings: Settings = Depends(get_settings),
) -> SampleResponse:
    if body.resolution > settings.max_resolution:
        raise ResolutionLimitError(body.resolution, settings.max_resolution)
    if body.start >= body.end:
        raise RangeError(body.start, body.end)

    points = sampler.sample(parser.parse(body.text), body.start, body.end, body.resolution)
    return SampleResponse(
        points=points,
        count=len(points),
        y_bounds=determine_y_bounds(points),
    )
