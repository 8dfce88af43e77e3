"""
Read-time redaction of soft-deleted comments.

Storage keeps a deleted comment intact; readers get a masked copy. The
mask hides what was said and who said it and zeroes the like count.
Everything needed to place the comment in its thread stays visible.
"""

# Placeholders existing API clients already receive for removed comments
DELETED_CONTENT = '[Deleted]'
REDACTED_USERNAME = '[Redacted]'

# Fields replaced on a deleted comment. Every other field passes through.
REDACTED_FIELDS = {
    'content': DELETED_CONTENT,
    'created_by_username': REDACTED_USERNAME,
    'likes': 0,
}


def redact_comment(data: dict) -> dict:
    """
    Return the reader-facing form of a serialized comment.

    A comment that is not deleted is returned as is. A deleted one is
    copied with the fields in REDACTED_FIELDS overwritten; the input is
    never modified.
    """
    if not data.get('deleted'):
        return data
    redacted = dict(data)
    for field, value in REDACTED_FIELDS.items():
        if field in redacted:
            redacted[field] = value
    return redacted
