"""Language labels for the file view, resolved through Pygments lexers."""

from __future__ import annotations

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

PLAIN_TEXT_LANGUAGE = "Text only"


def language_for_path(path: str, content: str | None = None) -> str:
    """Return the lexer name for ``path``, or ``"Text only"`` when unknown.

    ``content`` lets Pygments disambiguate extensions shared by several lexers.
    """
    name = path.rsplit("/", 1)[-1]
    if not name:
        return PLAIN_TEXT_LANGUAGE
    try:
        if content is None:
            lexer = get_lexer_for_filename(name)
        else:
            lexer = get_lexer_for_filename(name, content)
    except ClassNotFound:
        return PLAIN_TEXT_LANGUAGE
    return str(lexer.name)


__all__ = [
    "PLAIN_TEXT_LANGUAGE",
    "language_for_path",
]
