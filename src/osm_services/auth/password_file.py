"""
Password file support.

A password file is a text file with ``user:password`` pairs, one per line.
Lines starting with ``#`` are comments::

    # Example password file.
    fredfs@example.com:Wilma4evah
    barney@example.net:B3ttyRawks

How credentials are picked depends on how many non-blank lines there are:

- one line: used as-is, unless it is a comment
- two lines: the second is used, but only when the first is a comment and
  the second is not
- anything else: the user must already be configured and the password of
  the matching line is used
"""

from typing import List, Optional, Tuple

from osm_services.constants import PASSWORD_FILE_COMMENT, PASSWORD_FILE_SEPARATOR
from osm_services.errors import PasswordFileUnreadableError


def read_password_file(path: str) -> List[str]:
    """
    Read a password file into trimmed, non-blank lines.

    Raises:
        PasswordFileUnreadableError: If the file cannot be read or decoded
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise PasswordFileUnreadableError(str(path), reason=str(e)) from e

    stripped = (line.strip() for line in raw_lines)
    return [line for line in stripped if line]


def is_comment(line: str) -> bool:
    return line.startswith(PASSWORD_FILE_COMMENT)


def split_credentials(line: str) -> Tuple[str, str]:
    """Split ``user:password`` on the first separator; the password may contain ':'."""
    user, _, password = line.partition(PASSWORD_FILE_SEPARATOR)
    return user, password


def resolve_credentials(
    lines: List[str], current_user: Optional[str] = None
) -> Optional[Tuple[str, str]]:
    """
    Pick the credentials a password file provides.

    Args:
        lines: Trimmed, non-blank lines of the file
        current_user: The user already configured, used to filter files
            with several entries

    Returns:
        (user, password), or None when the file provides no credentials
    """
    if len(lines) == 1:
        if is_comment(lines[0]):
            return None
        return split_credentials(lines[0])

    if len(lines) == 2:
        first, second = lines
        if is_comment(first) and not is_comment(second):
            return split_credentials(second)
        return None

    credentials = None
    for line in lines:
        if is_comment(line):
            continue
        user, password = split_credentials(line)
        if current_user is not None and user == current_user:
            # Later entries for the same user win
            credentials = (user, password)
    return credentials
