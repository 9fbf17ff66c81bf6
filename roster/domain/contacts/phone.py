from __future__ import annotations

import re
from typing import Any

from roster.domain.models import PhoneChannel

NO_NUMBER_TEXT = "No Number Entered."
SEGMENT_SEPARATOR = " • "

_SPLIT_RE = re.compile(r"[;,/|]+")
_EXTENSION_RE = re.compile(r"(?:ext\.?|x)\s*:?\.?\s*(\d{1,6})\s*$", re.IGNORECASE)
_NON_DIGIT_RE = re.compile(r"\D")


def _split_segments(raw: str) -> list[str]:
    return [part.strip() for part in _SPLIT_RE.split(raw) if part.strip()]


def _format_segment(segment: str) -> PhoneChannel:
    ext_match = _EXTENSION_RE.search(segment)
    ext = ext_match.group(1) if ext_match else None
    number_part = segment[: ext_match.start()] if ext_match else segment
    digits = _NON_DIGIT_RE.sub("", number_part)

    if len(digits) == 11 and digits.startswith("1"):
        area, prefix, line = digits[1:4], digits[4:7], digits[7:]
    elif len(digits) == 10:
        area, prefix, line = digits[:3], digits[3:6], digits[6:]
    elif len(digits) == 7:
        # local number: no area code, link is still tel:+1<7 digits>
        area, prefix, line = "", digits[:3], digits[3:]
    else:
        return PhoneChannel(text=segment, href=None)

    text = f"({area}) {prefix}-{line}" if area else f"{prefix}-{line}"
    href = f"tel:+1{area}{prefix}{line}"
    if ext:
        text = f"{text} x{ext}"
        href = f"{href},{ext}"
    return PhoneChannel(text=text, href=href)


def format_phone(raw: Any) -> PhoneChannel:
    """
    Назначение:
        Нормализует сырой (возможно, многозначный) телефон для отображения.

    Входные данные:
        raw: строка вида "555-123-4567; 555-987-6543 x12" или None.

    Выходные данные:
        PhoneChannel(text, href):
            text: номера через " • " (неразобранные части как есть),
            href: tel:-ссылка первого распознанного номера или None.
    """
    value = "" if raw is None else str(raw).strip()
    if not value:
        return PhoneChannel(text=NO_NUMBER_TEXT, href=None)

    channels = [_format_segment(segment) for segment in _split_segments(value)]
    if not channels:
        # only separators, e.g. ";;"
        return PhoneChannel(text=NO_NUMBER_TEXT, href=None)

    text = SEGMENT_SEPARATOR.join(channel.text for channel in channels)
    href = next((channel.href for channel in channels if channel.href), None)
    return PhoneChannel(text=text, href=href)
