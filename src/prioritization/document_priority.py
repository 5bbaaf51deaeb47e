"""
LLM-assisted priority for assignment documents.

Text extraction is supplied by the host (see TextExtractor); this module only
decides what to ask the model and how to fall back. Every failure path
returns a "medium" assessment with a reason instead of raising.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Iterable, Optional, Protocol

from greedy.errors import UpstreamError
from greedy.models import FileAttachment
from llm.llm_client import LLMClient
from llm.schemas import PriorityAssessment

logger = logging.getLogger(__name__)

MAX_ANALYSIS_CHARS = 4000


class TextExtractor(Protocol):
    def extract_text(self, data: bytes) -> str:
        ...


def default_assessment(reason: str) -> PriorityAssessment:
    return PriorityAssessment(priority="medium", reason=reason)


def is_pdf(attachment: FileAttachment) -> bool:
    return "pdf" in attachment.type.lower() or attachment.name.lower().endswith(".pdf")


class PriorityAnalyzer:
    def __init__(self, llm_client: LLMClient, extractor: Optional[TextExtractor] = None):
        self.llm = llm_client
        self.extractor = extractor

    def analyze_text(self, content: str) -> PriorityAssessment:
        if not content or not content.strip():
            logger.info("No text to analyze for priority")
            return default_assessment("Unable to analyze document content. Setting default priority.")

        try:
            assessment = self.llm.assess_priority(content[:MAX_ANALYSIS_CHARS])
        except UpstreamError as e:
            logger.warning("Priority analysis failed: %s", e)
            return default_assessment("Error during AI analysis. Setting default priority.")

        if not assessment.reason:
            assessment.reason = f"The assignment appears to be {assessment.priority} priority."
        return assessment

    def analyze_document(self, data: bytes) -> PriorityAssessment:
        if self.extractor is None:
            return default_assessment("No text extractor configured. Setting default priority.")
        try:
            text = self.extractor.extract_text(data)
        except Exception as e:
            # extractors are third-party; image-only or broken documents raise
            logger.warning("Text extraction failed: %s", e)
            return default_assessment("Unable to read the document. Setting default priority.")
        return self.analyze_text(text)

    def analyze_attachment(self, attachment: FileAttachment) -> PriorityAssessment:
        if not is_pdf(attachment):
            return default_assessment("File is not a PDF. Setting default priority.")
        try:
            data = base64.b64decode(attachment.data, validate=True)
        except (binascii.Error, ValueError):
            return default_assessment("Attachment data is not valid base64. Setting default priority.")
        return self.analyze_document(data)

    def analyze_attachments(self, attachments: Iterable[FileAttachment]) -> Optional[PriorityAssessment]:
        """Assess the first PDF among the attachments; None when there is no PDF."""
        for attachment in attachments:
            if is_pdf(attachment):
                return self.analyze_attachment(attachment)
        return None
