"""Structured comment parser.

Understands both PHPDoc-style blocks (``/** ... */`` with ``*`` gutters) and
plain Python docstrings. The first paragraph is the summary, the following
paragraphs up to the first tag are the description, and every line starting
with ``@name`` opens a tag::

    Show a single user.

    Looks the user up by primary key.

    @response 404 User not found
    @deprecated
"""

import inspect
import re
from typing import Protocol

from route_swagger.errors import DocBlockError
from route_swagger.parser.base import DocTag, ParsedComment

TAG_RE = re.compile(r"^@([A-Za-z_][\w\-]*)(?:\s+(.*))?$")


class CommentParser(Protocol):
    def parse(self, text: str) -> ParsedComment: ...


class DocBlockParser:
    """Default structured comment parser."""

    def parse(self, text: str) -> ParsedComment:
        lines = _strip_markers(text)

        free_text: list[str] = []
        tags: list[DocTag] = []
        for line in lines:
            if line.startswith("@"):
                match = TAG_RE.match(line)
                if not match:
                    raise DocBlockError(f"Malformed tag: {line!r}")
                tags.append(DocTag(name=match.group(1), body=(match.group(2) or "").strip()))
            elif tags:
                # Continuation of the previous tag
                if line:
                    last = tags[-1]
                    last.body = f"{last.body} {line}".strip()
            else:
                free_text.append(line)

        paragraphs = _paragraphs(free_text)
        summary = " ".join(paragraphs[0]) if paragraphs else ""
        description = "\n\n".join("\n".join(p) for p in paragraphs[1:])
        return ParsedComment(summary=summary, description=description, tags=tags)


def safe_parse(parser: CommentParser, text: str) -> ParsedComment | DocBlockError:
    """Parse a comment, returning the error instead of raising it."""
    try:
        return parser.parse(text)
    except DocBlockError as e:
        return e
    except Exception as e:
        return DocBlockError(str(e))


def _strip_markers(text: str) -> list[str]:
    stripped = text.strip()
    if stripped.startswith("/**"):
        if not stripped.endswith("*/") or len(stripped) < 5:
            raise DocBlockError("Unterminated comment block")
        body = stripped[3:-2]
        lines = []
        for line in body.splitlines():
            line = line.strip()
            if line.startswith("*"):
                line = line[1:]
            lines.append(line.strip())
        return lines
    return [line.strip() for line in inspect.cleandoc(stripped).splitlines()]


def _paragraphs(lines: list[str]) -> list[list[str]]:
    paragraphs: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if line:
            current.append(line)
        elif current:
            paragraphs.append(current)
            current = []
    if current:
        paragraphs.append(current)
    return paragraphs


def own_doc(obj) -> str:
    """The docstring declared on ``obj`` itself, never an inherited one."""
    doc = vars(obj).get("__doc__") if isinstance(obj, type) else getattr(obj, "__doc__", None)
    return inspect.cleandoc(doc) if doc else ""
