"""
Decoder for individual Lynis warning/suggestion entries.

Entries look like `SSH-7408|X11Forwarding enabled|suggestion|text: disable it`.
Fields are id, message, severity and an optional details field that uses
`-` to mean "none".
"""

from .schemas import Finding


FIELD_SEPARATOR = "|"
NO_DETAILS = "-"
DETAILS_MARKER = "text:"


def _clean_details(raw_details: str) -> str:
    """Strip the optional `text:` marker and surrounding whitespace."""
    details = raw_details.strip()
    if details.startswith(DETAILS_MARKER):
        details = details[len(DETAILS_MARKER):]
    return details.strip()


def decode_item(raw: str) -> Finding:
    """
    Decode one pipe-delimited finding string.

    Never raises: missing fields fall back to "N/A" / "No message." / "".

    Args:
        raw: Raw entry from a `warning[]` or `suggestion[]` line

    Returns:
        Finding with id, message and details
    """
    parts = raw.split(FIELD_SEPARATOR)

    details = ""
    if len(parts) > 3 and parts[3] != NO_DETAILS:
        details = _clean_details(parts[3])

    return Finding(
        id=parts[0] or "N/A",
        message=(parts[1] if len(parts) > 1 else "") or "No message.",
        details=details,
    )


def decode_items(entries: list[str]) -> list[Finding]:
    """Decode a list of raw entries, preserving order."""
    return [decode_item(entry) for entry in entries]
