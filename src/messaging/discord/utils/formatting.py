"""Text helpers for Discord replies."""

from collections.abc import Iterable

# Discord rejects message content longer than this
DISCORD_MAX_MESSAGE_LENGTH = 2000

TRUNCATION_SUFFIX = "\n…"


def truncate_message(content: str, limit: int = DISCORD_MAX_MESSAGE_LENGTH) -> str:
    """Shorten content so Discord accepts it.

    :param content: Message text.
    :param limit: Maximum length in characters.
    :returns: The content, cut with a trailing ellipsis if it was too long.
    """
    if len(content) <= limit:
        return content
    return content[: limit - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def with_header(header: str, lines: Iterable[str], empty: str) -> str:
    """Join a header and body lines, using a placeholder when there are none.

    :param header: First line of the message.
    :param lines: Body lines.
    :param empty: Line shown when there are no body lines.
    :returns: The full message.
    """
    body = "\n".join(lines)
    return f"{header}\n{body or empty}"
