"""
Deep analysis API endpoint.

Routes: GET /deep-analysis/{identifier}

The identifier is either the session id returned by POST /analyze or an id
issued by an external workflow (e.g. a checkout session id).

Dependencies: cv_roast.application.services, cv_roast.models
System role: Recommendation HTTP API
"""

from fastapi import APIRouter, Depends

from cv_roast.api.deps import get_critique_pipeline
from cv_roast.application.services import CritiquePipeline
from cv_roast.models.critique import DeepAnalysisResponse

router = APIRouter(prefix="/deep-analysis", tags=["deep-analysis"])


@router.get("/{identifier}", response_model=DeepAnalysisResponse)
async def get_deep_analysis(
    identifier: str,
    pipeline: CritiquePipeline = Depends(get_critique_pipeline),
) -> DeepAnalysisResponse:
    """Personalized recommendations, or the generic set when no session matches."""
    result = await pipeline.deep_analysis(identifier)
    return DeepAnalysisResponse(categories=result.categories, source=result.source)
