"""
Password escaping and encoding helpers.

Two contexts are supported:

- CLI connection strings (``key=value;`` pairs), where the characters
  ``; = [ ] { }`` are wrapped in a literal brace pair: ``c`` -> ``{c}``.
- URL connection strings, where the password is percent-encoded for use
  inside the URI authority component.

Both transforms are pure and total; decoding an encoded value always
returns the original password.
"""

import re
from typing import Optional
from urllib.parse import quote, unquote

# Characters that must be brace-escaped inside a semicolon connection string
CLI_RESERVED_CHARACTERS = ";=[]{}"

# Characters left as-is by the URL encoder (besides letters, digits and "_.-~").
# Quotes and braces are never in this set, so they are always encoded.
URL_SAFE_CHARACTERS = "!*()"

_CLI_RESERVED_PATTERN = re.compile(r"[;=\[\]{}]")
_CLI_ESCAPED_PATTERN = re.compile(r"\{([;=\[\]{}])\}")
# Password key (or its pwd alias) at the start of a parameter
_PASSWORD_KEY = r"(?i)(?:^|(?<=;))\s*(?:password|pwd)\s*="
_PASSWORD_PARAM_PATTERN = re.compile(_PASSWORD_KEY + r"(?P<value>(?:\{[;=\[\]{}]\}|[^;])*)")
_RAW_PASSWORD_PARAM_PATTERN = re.compile(_PASSWORD_KEY + r"(?P<value>[^;]*)")


def escape_cli_password(password: str) -> str:
    """
    Escape a password for a semicolon-delimited connection string.

    Every reserved character is wrapped in braces, so ``{`` becomes ``{{}``
    and ``}`` becomes ``{}}``.

    Args:
        password: Raw password

    Returns:
        Escaped password
    """
    return _CLI_RESERVED_PATTERN.sub(lambda match: "{" + match.group(0) + "}", password)


def unescape_cli_password(escaped_password: str) -> str:
    """
    Reverse escape_cli_password.

    The scan runs left to right and consumes one ``{c}`` triple at a time.
    In an escaped value every brace belongs to exactly one triple that starts
    on a triple boundary, so ``{{}`` and ``{}}`` can never be misread as a
    delimiter followed by an escaped character.

    Args:
        escaped_password: Password produced by escape_cli_password

    Returns:
        Raw password
    """
    return _CLI_ESCAPED_PATTERN.sub(lambda match: match.group(1), escaped_password)


def url_encode_password(password: str) -> str:
    """Percent-encode a password for the userinfo part of a URL."""
    return quote(password, safe=URL_SAFE_CHARACTERS)


def url_decode_password(encoded_password: str) -> str:
    """Decode a percent-encoded password."""
    return unquote(encoded_password)


def find_password_param(connection_string: str) -> Optional[re.Match]:
    """
    Locate the ``password=`` (or ``pwd=``) value of a semicolon connection string.

    Escape triples are part of the value, so an escaped ``{;}`` does not
    end it.
    """
    return _PASSWORD_PARAM_PATTERN.search(connection_string)


def escape_password_in_url(connection_string: str) -> str:
    """
    Escape the raw password held in a semicolon connection string.

    Used when the raw connection string is the stored form and the CLI needs
    the escaped one. Strings without a password parameter are returned as-is.
    """
    match = _RAW_PASSWORD_PARAM_PATTERN.search(connection_string)
    if not match:
        return connection_string

    escaped = escape_cli_password(match.group("value"))
    return connection_string[:match.start("value")] + escaped + connection_string[match.end("value"):]


def unescape_password_in_url(connection_string: str) -> str:
    """
    Unescape the password held in a semicolon connection string.

    Used when the escaped connection string is the stored form and the
    adapter needs the raw one. Strings without a password parameter are
    returned as-is.
    """
    match = find_password_param(connection_string)
    if not match:
        return connection_string

    raw = unescape_cli_password(match.group("value"))
    return connection_string[:match.start("value")] + raw + connection_string[match.end("value"):]
