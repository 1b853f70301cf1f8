"""
Analyze API endpoint.

Routes: POST /analyze

Dependencies: cv_roast.application.services, cv_roast.models
System role: Document critique HTTP API
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from cv_roast.api.deps import get_critique_pipeline, get_upload_settings
from cv_roast.application.services import CritiquePipeline
from cv_roast.configs.upload import UploadSettings
from cv_roast.core.exceptions import ExtractionError
from cv_roast.models.critique import AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])


async def read_upload(file: UploadFile | None, limits: UploadSettings) -> bytes:
    """
    Validate an upload and read its bytes.

    Args:
        file: Uploaded file, None when the form has no file part
        limits: Allowed extensions and maximum size

    Returns:
        bytes: File content

    Raises:
        HTTPException(400): Missing file, disallowed extension or empty file
        HTTPException(413): File larger than the configured maximum
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    extension = Path(file.filename).suffix.lower()
    if extension not in limits.allowed_extensions:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{extension}'. Allowed: {', '.join(sorted(limits.allowed_extensions))}",
        )

    data = await file.read(limits.max_file_size_bytes + 1)
    if len(data) > limits.max_file_size_bytes:
        raise HTTPException(status_code=413, detail="File exceeds maximum upload size")
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    return data


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_document(
    file: UploadFile | None = File(default=None),
    pipeline: CritiquePipeline = Depends(get_critique_pipeline),
    limits: UploadSettings = Depends(get_upload_settings),
) -> AnalyzeResponse:
    """
    Critique an uploaded document.

    Always answers 200 once the document text could be extracted; generation
    and storage failures degrade to fallback content.

    Args:
        file: Multipart document upload
        pipeline: Injected critique pipeline
        limits: Injected upload limits

    Returns:
        AnalyzeResponse: Critique with scores and the new session id

    Raises:
        HTTPException(400): Missing, invalid or unreadable document
        HTTPException(413): Document too large
    """
    data = await read_upload(file, limits)

    try:
        result, _ = await pipeline.analyze(data, file_name=file.filename)
    except ExtractionError as e:
        logger.info(
            f"{__name__}:analyze_document - Rejected unreadable document",
            extra={"file_name": file.filename, "reason": e.message},
        )
        raise HTTPException(
            status_code=400,
            detail="Failed to extract text from document or document is empty",
        )

    return AnalyzeResponse.from_result(result)
