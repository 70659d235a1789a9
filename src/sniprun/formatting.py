"""Rendering of run results for the editor.

Successful output is shown through ``echo "<text>"``, so every double quote
must be backslash‑escaped.  Quotes that already arrive escaped are first
unescaped, which keeps the operation free of double escapes::

    >>> escape_output('He said "hi"\\n')
    'He said \\\\"hi\\\\"'
    >>> escape_output(escape_output('He said "hi"'))
    'He said \\\\"hi\\\\"'

Errors go to the editor's error channel, which takes raw text.
"""

from __future__ import annotations

from .errors import SniprunError


def escape_output(text: str) -> str:
    text = text.replace('\\"', '"')
    text = text.replace('"', '\\"')
    return text.rstrip()


def format_error(error: SniprunError) -> str:
    return str(error)
