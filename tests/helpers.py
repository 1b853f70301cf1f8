"""
Test helpers shared across test modules.

Provides: fake clock, minimal PDF builder, fake chat model replies and
generator wiring over the local prompts
Dependencies: langchain_core
"""

import json
from unittest.mock import AsyncMock, MagicMock

from langchain_core.language_models.fake_chat_models import FakeListChatModel

from cv_roast.core.critique.critique_generator import CritiqueGenerator
from cv_roast.core.critique.critique_prompt import CRITIQUE_PROMPT, RECOMMENDATION_PROMPT
from cv_roast.core.critique.recommendation_generator import RecommendationGenerator


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[list[str]]) -> bytes:
    """
    Build a minimal valid PDF with one Tj line per string.

    Args:
        pages: Text lines per page; an empty list yields a blank page

    Returns:
        bytes: PDF document with a correct xref table
    """
    objects: list[bytes] = []
    page_count = len(pages)
    first_page_obj = 4
    kids = " ".join(f"{first_page_obj + 2 * i} 0 R" for i in range(page_count))

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    for index, lines in enumerate(pages):
        content_obj = first_page_obj + 2 * index + 1
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {content_obj} 0 R >>"
            ).encode()
        )
        ops = ["BT", "/F1 12 Tf", "72 720 Td"]
        for position, line in enumerate(lines):
            if position:
                ops.append("0 -16 Td")
            ops.append(f"({_pdf_escape(line)}) Tj")
        ops.append("ET")
        stream = "\n".join(ops).encode() if lines else b""
        objects.append(
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n".encode()
    return bytes(out)


def critique_json(
    analysis_text: str = "PROFESSIONAL EXPERIENCE:\nThree jobs, zero results.",
    humiliation_score=80,
    quality_score=4,
) -> str:
    """Serialize a critique reply the way the model would."""
    return json.dumps({
        "analysis_text": analysis_text,
        "humiliation_score": humiliation_score,
        "quality_score": quality_score,
    })


def recommendations_json() -> str:
    """Serialize a recommendation reply the way the model would."""
    return json.dumps({
        "categories": [
            {"category": "Content Improvements", "items": ["Quantify the Initech work"]},
            {"category": "Skills Enhancement", "items": ["Learn a cloud platform", "Drop 'MS Word'"]},
        ]
    })


def fake_model(*responses: str) -> FakeListChatModel:
    """Chat model replying with the given strings in order."""
    return FakeListChatModel(responses=list(responses))


def failing_model(exc: BaseException) -> MagicMock:
    """Chat model whose every call raises exc."""
    model = MagicMock()
    model.ainvoke = AsyncMock(side_effect=exc)
    return model


def critique_generator(model, timeout_seconds: float = 5.0) -> CritiqueGenerator:
    """CritiqueGenerator over the local prompt and a given model."""
    return CritiqueGenerator(prompt=CRITIQUE_PROMPT, model=model, timeout_seconds=timeout_seconds)


def recommendation_generator(model, timeout_seconds: float = 5.0) -> RecommendationGenerator:
    """RecommendationGenerator over the local prompt and a given model."""
    return RecommendationGenerator(prompt=RECOMMENDATION_PROMPT, model=model, timeout_seconds=timeout_seconds)
