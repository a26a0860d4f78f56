"""
Reporter for Section 2

Takes an IngestedReport from Section 1 and produces a markdown
remediation plan via Gemini:
1. Condense warnings and the top suggestions into a digest
2. Wrap the digest and the fixed system prompt into a generateContent payload
3. Dispatch with retries and extract the markdown answer
"""

import time
from typing import Optional

from pydantic import BaseModel, Field

from ..section1_ingestion.schemas import FindingKind, IngestedReport
from .config import AdvisorConfig
from .dispatcher import GeminiDispatcher
from .exceptions import ConfigurationError
from .prompts import AnalysisPrompts


class AnalysisResult(BaseModel):
    """Markdown returned by the advisor for one report."""

    markdown: str = Field(default="", description="Model answer, empty if the model returned no text")
    model: str = Field(default=AdvisorConfig.GEMINI_MODEL, description="Model that produced the answer")
    source_file: Optional[str] = Field(None, description="Report the analysis belongs to")
    hostname: Optional[str] = Field(None, description="Host the report describes")
    generated_at: str = Field(default_factory=lambda: time.strftime("%Y-%m-%d %H:%M:%S"))

    @property
    def is_empty(self) -> bool:
        return not self.markdown


def _digest_line(raw: str) -> str:
    """Render one raw entry as `- <id>: <message>`."""
    parts = raw.split("|")
    message = parts[1] if len(parts) > 1 else ""
    return f"- {parts[0]}: {message}"


def build_digest(
    report: IngestedReport,
    max_suggestions: int = AdvisorConfig.MAX_SUGGESTIONS_IN_DIGEST,
) -> str:
    """
    Build the user query sent to the model.

    All warnings are listed; suggestions are cut to the first
    `max_suggestions`. Empty sections are omitted.
    """
    warnings = report.raw_entries(FindingKind.WARNING)
    suggestions = report.raw_entries(FindingKind.SUGGESTION)

    digest = AnalysisPrompts.USER_PROMPT_TEMPLATE.format(
        os_name=AdvisorConfig.DEFAULT_OS_NAME if report.os_fullname is None else report.os_fullname,
    )

    if warnings:
        digest += AnalysisPrompts.WARNINGS_HEADER + "\n"
        digest += "\n".join(_digest_line(w) for w in warnings) + "\n\n"

    if suggestions:
        digest += AnalysisPrompts.SUGGESTIONS_HEADER.format(limit=max_suggestions) + "\n"
        digest += "\n".join(_digest_line(s) for s in suggestions[:max_suggestions])

    return digest


def build_payload(digest: str, system_prompt: str = AnalysisPrompts.SYSTEM_PROMPT) -> dict:
    """Wrap a digest into a generateContent request body."""
    return {
        "contents": [{"parts": [{"text": digest}]}],
        "systemInstruction": {"parts": [{"text": system_prompt}]},
    }


def extract_markdown(response: dict) -> str:
    """Pull `candidates[0].content.parts[0].text` out of a response body."""
    try:
        text = response["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class Reporter:
    """
    AI remediation advisor for parsed Lynis reports.

    Args:
        api_key: Gemini key, usually from `CredentialStore.load()`
        dispatcher: Optional dispatcher (tests inject one with a fake sleep)
        max_attempts: Attempts per analysis before giving up
    """

    def __init__(
        self,
        api_key: Optional[str],
        dispatcher: GeminiDispatcher | None = None,
        max_attempts: int = AdvisorConfig.RETRY_ATTEMPTS,
    ):
        self.api_key = api_key
        self.dispatcher = dispatcher or GeminiDispatcher()
        self.max_attempts = max_attempts

    async def analyze(self, report: IngestedReport) -> AnalysisResult:
        """
        Request a prioritized remediation plan for a report.

        Raises:
            ConfigurationError: If no API key is configured
            GeminiAPIError: If the endpoint keeps failing
        """
        if not self.api_key:
            raise ConfigurationError(
                "Gemini API key not configured. Run with --set-key or set GOOGLE_API_KEY."
            )

        payload = build_payload(build_digest(report))
        response = await self.dispatcher.submit(self.api_key, payload, self.max_attempts)

        return AnalysisResult(
            markdown=extract_markdown(response),
            source_file=report.source_file,
            hostname=report.hostname,
        )
