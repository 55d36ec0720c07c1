"""Text normalization applied before lexing.

Folds full-width forms and common math glyphs into the ASCII operators and
digits the lexer understands.
"""

from __future__ import annotations

import unicodedata

# Glyphs mapped after NFKC. Some full-width forms already fold under NFKC and
# are listed anyway so the table reads as the complete set.
_GLYPHS: dict[str, str] = {
    "×": "*",  # × multiplication sign
    "✕": "*",  # ✕ multiplication x
    "✖": "*",  # ✖ heavy multiplication x
    "·": "*",  # · middle dot
    "・": "*",  # ・ katakana middle dot
    "÷": "/",  # ÷ division sign
    "／": "/",  # ／ full-width solidus
    "−": "-",  # − minus sign
    "–": "-",  # – en dash
    "—": "-",  # — em dash
    "％": "%",  # ％ full-width percent
    "＾": "^",  # ＾ full-width circumflex
    "￥": "\\",  # ￥ full-width yen
    "¥": "\\",  # ¥ yen sign, what NFKC turns the full-width form into
    "，": ",",  # ， full-width comma
}

_TABLE = str.maketrans(_GLYPHS)


def normalize_expr(text: str | None) -> str:
    """Return text in NFKC form with math glyphs mapped to ASCII.

    Total and idempotent: ``normalize_expr(normalize_expr(s)) == normalize_expr(s)``.
    """
    if not text:
        return ""
    return unicodedata.normalize("NFKC", text).translate(_TABLE)
