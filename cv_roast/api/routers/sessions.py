"""
Session API endpoints.

Routes: GET /sessions/{session_id}/critique

Dependencies: cv_roast.application.services, cv_roast.models
System role: Session read-back HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from cv_roast.api.deps import get_critique_pipeline
from cv_roast.application.services import CritiquePipeline
from cv_roast.models.critique import AnalyzeResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/{session_id}/critique", response_model=AnalyzeResponse)
async def get_session_critique(
    session_id: str,
    pipeline: CritiquePipeline = Depends(get_critique_pipeline),
) -> AnalyzeResponse:
    """
    Get the critique stored for a session.

    Raises:
        HTTPException(404): Session unknown or expired
    """
    result = await pipeline.get_critique(session_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No critique for session {session_id}")
    return AnalyzeResponse.from_result(result)
