"""Split marked-up verse text into text, footnote and marker segments."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

from ..config import get_settings

MARKER_REGEX = re.compile(r"\\(\+?)([A-Za-z]+[0-9]*)(\*?)")


def parse_segments(
    text: str,
    note_markers: Optional[Iterable[str]] = None,
) -> List[Dict[str, Any]]:
    """
    Split verse text with inline markers into ordered segments.

    Args:
        text: Verse text, for example ``"In the beginning \\f + note\\f*"``
        note_markers: Markers whose body is kept opaque (footnotes, cross references)

    Returns:
        List of segments: ``text``, ``footnote`` or standalone ``paragraph`` markers
    """
    if not text:
        return []

    notes = set(note_markers if note_markers is not None else get_settings().note_markers)
    segments: List[Dict[str, Any]] = []
    current_text = ""
    i = 0

    def _flush() -> None:
        nonlocal current_text
        if current_text:
            segments.append({'type': 'text', 'text': current_text})
            current_text = ""

    while i < len(text):
        match = MARKER_REGEX.match(text, i) if text[i] == '\\' else None
        if match is None:
            current_text += text[i]
            i += 1
            continue

        nested, tag, closing = match.groups()
        end = match.end()

        # Stray closing marker without an opening one
        if closing:
            i = end
            continue

        if tag in notes:
            end_tag = f"{tag}*"
            close_at = text.find(f"\\{end_tag}", end)
            body_end = close_at if close_at != -1 else len(text)
            _flush()
            segments.append({
                'type': 'footnote',
                'tag': tag,
                'endTag': end_tag,
                'content': text[end:body_end].strip(),
            })
            i = body_end + len(end_tag) + 1 if close_at != -1 else len(text)
            continue

        closing_marker = f"\\{nested}{tag}*"
        close_at = text.find(closing_marker, end)
        if close_at != -1:
            # Character marker: keep the wrapped text, drop "|attribute" payloads
            inner = text[end:close_at]
            if inner.startswith(' '):
                inner = inner[1:]
            inner = inner.split('|', 1)[0]
            for segment in parse_segments(inner, notes):
                if segment['type'] == 'text':
                    current_text += segment['text']
                else:
                    _flush()
                    segments.append(segment)
            i = close_at + len(closing_marker)
            continue

        _flush()
        segments.append({'type': 'paragraph', 'tag': tag})
        i = end + 1 if text[end:end + 1] == ' ' else end

    _flush()
    return segments


def segments_text(segments: Iterable[Dict[str, Any]]) -> str:
    """Join the text of all non-footnote segments the way occurrences are counted."""
    return ' '.join(
        segment['text']
        for segment in segments
        if segment.get('type') == 'text' and segment.get('text')
    )
