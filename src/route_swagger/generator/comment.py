"""Comment metadata extractor: summary, description, deprecation, responses."""

import logging

from route_swagger.errors import DocBlockError
from route_swagger.parser.base import CommentMetadata, DocTag, ResponseSpec
from route_swagger.parser.docblock import CommentParser, DocBlockParser, safe_parse

logger = logging.getLogger(__name__)

DEPRECATED_TAG = "deprecated"
RESPONSE_TAG = "response"


def extract(
    raw_comment: str,
    parse_enabled: bool = True,
    parser: CommentParser | None = None,
) -> CommentMetadata:
    """Extract handler metadata from its structured comment.

    Disabled parsing, an empty comment and a malformed comment all produce
    the default metadata; documentation problems never abort generation.
    """
    if not parse_enabled or not raw_comment or not raw_comment.strip():
        return CommentMetadata()

    parsed = safe_parse(parser or DocBlockParser(), raw_comment)
    if isinstance(parsed, DocBlockError):
        logger.warning("Ignoring malformed comment: %s", parsed)
        return CommentMetadata()

    responses = []
    for tag in parsed.tags_by_name(RESPONSE_TAG):
        response = parse_response_tag(tag)
        if response is not None:
            responses.append(response)

    return CommentMetadata(
        deprecated=parsed.has_tag(DEPRECATED_TAG),
        summary=parsed.summary,
        description=parsed.description,
        responses=responses,
    )


def parse_response_tag(tag: DocTag) -> ResponseSpec | None:
    """Split ``@response 404 Not found`` into code and description.

    A tag with only a status code gets an empty description.
    """
    parts = tag.body.split(None, 1)
    if not parts:
        logger.warning("Ignoring empty @%s tag", tag.name)
        return None
    return ResponseSpec(
        status_code=parts[0],
        description=parts[1].strip() if len(parts) > 1 else "",
    )
