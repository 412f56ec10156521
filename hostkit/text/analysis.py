"""
Text analysis: tokenization and extraction of dates, links, phone numbers
and street addresses.

Extraction is pattern based. Each finder returns TextMatch records with the
matched span and a normalized value; overlapping hits are resolved in favour
of the earliest, then the longest, match.
"""

import datetime
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional


@dataclass
class TextMatch:
    """One extracted item."""
    kind: str  # date | link | phone | address
    text: str
    start: int
    end: int
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        value = self.value
        if isinstance(value, datetime.date):
            value = value.isoformat()
        return {
            "kind": self.kind,
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "value": value,
        }


# Tokenization

WORD_PATTERN = re.compile(r"\w+(?:['’-]\w+)*")
SENTENCE_BREAK = re.compile(r"(?<=[.!?])[\"'”)]*\s+")
PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")

TOKEN_UNITS = ("word", "sentence", "paragraph")


def tokenize(text: str, unit: str = "word") -> List[str]:
    """
    Split text into words, sentences or paragraphs.

    Args:
        text: Input text
        unit: One of "word", "sentence", "paragraph"

    Returns:
        Tokens in order, without surrounding whitespace

    Raises:
        ValueError: If unit is unknown
    """
    if unit == "word":
        return WORD_PATTERN.findall(text)
    if unit == "sentence":
        pieces = []
        for paragraph in PARAGRAPH_BREAK.split(text):
            pieces.extend(SENTENCE_BREAK.split(paragraph.strip()))
        return [piece.strip() for piece in pieces if piece.strip()]
    if unit == "paragraph":
        return [p.strip() for p in PARAGRAPH_BREAK.split(text) if p.strip()]
    raise ValueError(f"Unknown token unit: {unit}. Expected one of {TOKEN_UNITS}")


# Dates

MONTHS = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

# Longest names first so "march" wins over "mar"
_MONTH = "|".join(sorted(MONTHS, key=len, reverse=True))
_ORDINAL = r"(?:st|nd|rd|th)?"

ISO_DATE = re.compile(r"\b(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})\b")
SLASH_DATE = re.compile(r"\b(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})\b")
MONTH_FIRST_DATE = re.compile(
    rf"\b(?P<month>{_MONTH})\.?\s+(?P<day>\d{{1,2}}){_ORDINAL},?\s+(?P<year>\d{{4}})\b",
    re.IGNORECASE,
)
DAY_FIRST_DATE = re.compile(
    rf"\b(?P<day>\d{{1,2}}){_ORDINAL}\s+(?P<month>{_MONTH})\.?,?\s+(?P<year>\d{{4}})\b",
    re.IGNORECASE,
)


def _month_number(token: str) -> int:
    if token.isdigit():
        return int(token)
    return MONTHS[token.lower()]


def find_dates(text: str) -> List[TextMatch]:
    """Find calendar dates; value is a datetime.date. Impossible dates are skipped."""
    matches = []
    for pattern in (ISO_DATE, SLASH_DATE, MONTH_FIRST_DATE, DAY_FIRST_DATE):
        for match in pattern.finditer(text):
            try:
                value = datetime.date(
                    int(match.group("year")),
                    _month_number(match.group("month")),
                    int(match.group("day")),
                )
            except ValueError:
                continue
            matches.append(TextMatch("date", match.group(0), match.start(), match.end(), value))
    return _without_overlaps(matches)


# Links

URL_PATTERN = re.compile(r"\b(?:https?://|www\.)[^\s<>\"']+", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
TRAILING_PUNCTUATION = ".,;:!?)]}"


def find_links(text: str) -> List[TextMatch]:
    """Find URLs and e-mail addresses; value is a usable URL."""
    matches = []
    for match in URL_PATTERN.finditer(text):
        url = match.group(0).rstrip(TRAILING_PUNCTUATION)
        value = url if "://" in url else f"http://{url}"
        matches.append(TextMatch("link", url, match.start(), match.start() + len(url), value))

    for match in EMAIL_PATTERN.finditer(text):
        address = match.group(0)
        matches.append(TextMatch("link", address, match.start(), match.end(), f"mailto:{address}"))

    return _without_overlaps(matches)


# Phone numbers

NANP_PHONE = re.compile(
    r"(?<![\w+])(?:\+?1[\s.-]?)?(?:\(\d{3}\)\s?|\d{3}[\s.-]?)\d{3}[\s.-]?\d{4}(?!\w)"
)
INTERNATIONAL_PHONE = re.compile(
    r"(?<![\w+])\+[1-9]\d{0,2}(?:[\s.-]?\(?\d{1,4}\)?){2,5}(?!\w)"
)


def _phone_value(number: str) -> str:
    digits = re.sub(r"\D", "", number)
    return f"+{digits}" if number.startswith("+") else digits


def find_phone_numbers(text: str) -> List[TextMatch]:
    """Find North American and +country-code phone numbers; value is the digits."""
    matches = []
    for match in NANP_PHONE.finditer(text):
        matches.append(TextMatch("phone", match.group(0), match.start(), match.end(), _phone_value(match.group(0))))

    for match in INTERNATIONAL_PHONE.finditer(text):
        value = _phone_value(match.group(0))
        if 8 <= len(value) - 1 <= 15:
            matches.append(TextMatch("phone", match.group(0), match.start(), match.end(), value))

    return _without_overlaps(matches)


# Street addresses

STREET_SUFFIXES = (
    "Street", "St", "Avenue", "Ave", "Road", "Rd", "Boulevard", "Blvd",
    "Lane", "Ln", "Drive", "Dr", "Court", "Ct", "Way", "Place", "Pl",
    "Terrace", "Ter", "Circle", "Cir", "Parkway", "Pkwy", "Highway", "Hwy",
)

ADDRESS_PATTERN = re.compile(
    r"\b(?P<street>\d{1,6}\s+(?:[A-Z0-9][\w'-]*\s+){1,5}"
    rf"(?:{'|'.join(STREET_SUFFIXES)})\b"
    r"(?:\s+(?:NE|NW|SE|SW|N|S|E|W)\b)?)"
    r"(?:\.(?=,))?"
    r"(?:,?\s+(?P<unit>(?:Apt|Suite|Ste|Unit)\.?\s*[\w-]+|#\s*[\w-]+))?"
    r"(?:,\s*(?P<city>[A-Z][A-Za-z.]*(?:\s[A-Z][A-Za-z.]*)*),\s*(?P<state>[A-Z]{2})"
    r"(?:\s+(?P<zip>\d{5}(?:-\d{4})?))?\b)?"
)


def find_addresses(text: str) -> List[TextMatch]:
    """Find US-style street addresses; value maps components to strings."""
    matches = []
    for match in ADDRESS_PATTERN.finditer(text):
        components = {k: v for k, v in match.groupdict().items() if v is not None}
        matches.append(TextMatch("address", match.group(0), match.start(), match.end(), components))
    return _without_overlaps(matches)


FINDERS: Dict[str, Callable[[str], List[TextMatch]]] = {
    "date": find_dates,
    "link": find_links,
    "phone": find_phone_numbers,
    "address": find_addresses,
}


def analyze(text: str, kinds: Optional[Iterable[str]] = None) -> List[TextMatch]:
    """
    Run every finder (or the selected kinds) and merge results by position.

    Raises:
        ValueError: If an unknown kind is requested
    """
    selected = list(kinds) if kinds is not None else list(FINDERS)
    unknown = [kind for kind in selected if kind not in FINDERS]
    if unknown:
        raise ValueError(f"Unknown analysis kinds: {unknown}. Expected some of {list(FINDERS)}")

    matches: List[TextMatch] = []
    for kind in selected:
        matches.extend(FINDERS[kind](text))
    return sorted(matches, key=lambda m: (m.start, m.end))


def _without_overlaps(matches: List[TextMatch]) -> List[TextMatch]:
    kept: List[TextMatch] = []
    for match in sorted(matches, key=lambda m: (m.start, -(m.end - m.start))):
        if kept and match.start < kept[-1].end:
            continue
        kept.append(match)
    return kept
