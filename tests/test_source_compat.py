"""Package sources must stay valid for every interpreter in requires-python."""

import tokenize
from pathlib import Path

import pytest


PACKAGE_DIR = Path(__file__).resolve().parent.parent / "hostkit"
SOURCES = sorted(PACKAGE_DIR.rglob("*.py"))


def _quote_of(token_text, prefixes):
    body = token_text.lstrip(prefixes)
    return body[:3] if body[:3] in ('"""', "'''") else body[:1]


def reused_fstring_quotes(path):
    """Return line numbers where a string inside an f-string reuses its quote.

    Interpreters before 3.12 cannot parse such f-strings. Older tokenizers
    have no f-string tokens and simply fail to import the file instead.
    """
    fstring_start = getattr(tokenize, "FSTRING_START", None)
    if fstring_start is None:
        return []

    lines = []
    open_quotes = []
    with tokenize.open(path) as f:
        for tok in tokenize.generate_tokens(f.readline):
            if tok.type == fstring_start:
                quote = _quote_of(tok.string, "rRfF")
                if open_quotes and quote[0] == open_quotes[-1][0] and len(open_quotes[-1]) == 1:
                    lines.append(tok.start[0])
                open_quotes.append(quote)
            elif tok.type == tokenize.FSTRING_END:
                open_quotes.pop()
            elif tok.type == tokenize.STRING and open_quotes:
                quote = _quote_of(tok.string, "rRbBuU")
                outer = open_quotes[-1]
                if quote.startswith(outer) or (len(outer) == 1 and quote[0] == outer):
                    lines.append(tok.start[0])
    return lines


class TestSourceCompatibility:
    """Guards against syntax newer than the oldest supported interpreter."""

    def test_sources_found(self):
        assert PACKAGE_DIR / "exec" / "launcher.py" in SOURCES

    @pytest.mark.parametrize("path", SOURCES, ids=lambda p: str(p.relative_to(PACKAGE_DIR)))
    def test_no_reused_quotes_inside_fstrings(self, path):
        assert reused_fstring_quotes(path) == []

    def test_detects_reused_quote(self, tmp_path):
        sample = tmp_path / "sample.py"
        sample.write_text('value = f"{name or "x"}"\nother = f"{name or \'x\'}"\n')

        expected = [1] if hasattr(tokenize, "FSTRING_START") else []
        assert reused_fstring_quotes(sample) == expected
