"""
Section 2: AI Advisor

This section takes parsed Lynis reports from Section 1 (Ingestion) and
asks Gemini for a short, prioritized remediation plan:
1. Digest of warnings and top suggestions
2. Retried submission with exponential backoff on server errors
3. Markdown answer extraction
"""

__version__ = "1.0.0"
