"""Normalize member and aggregate names into exported identifiers"""

import re

# Words rendered fully uppercase when they appear in an identifier.
ACRONYMS = frozenset(
    {
        "ACL",
        "API",
        "ASCII",
        "CPU",
        "CSS",
        "DNS",
        "EOF",
        "GUID",
        "HTML",
        "HTTP",
        "HTTPS",
        "ID",
        "IP",
        "JSON",
        "LHS",
        "QPS",
        "RAM",
        "RHS",
        "RPC",
        "SLA",
        "SMTP",
        "SQL",
        "SSH",
        "TCP",
        "TLS",
        "TTL",
        "UDP",
        "UI",
        "UID",
        "UUID",
        "URI",
        "URL",
        "UTF8",
        "VM",
        "XML",
        "XSRF",
        "XSS",
    }
)

_LOWER_TO_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_TO_WORD = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")

MODEL_SUFFIX = "Model"


def split_words(name: str) -> list[str]:
    """Split a name on separators and camel-case boundaries

    Examples:
        >>> split_words("userId")
        ['user', 'Id']
        >>> split_words("HTTPServer_port")
        ['HTTP', 'Server', 'port']
    """
    spaced = _ACRONYM_TO_WORD.sub(r"\1 \2", name)
    spaced = _LOWER_TO_UPPER.sub(r"\1 \2", spaced)
    return [word for word in _SEPARATORS.split(spaced) if word]


def to_identifier(name: str) -> str:
    """Convert a member name into an exported identifier

    Each word is capitalized and known acronyms are written fully uppercase,
    so a trailing ``id`` always reads as ``ID``.

    Args:
        name: Raw member or aggregate name.

    Returns:
        The normalized identifier.

    Raises:
        ValueError: If the name contains no alphanumeric characters.

    Examples:
        >>> to_identifier("userId")
        'UserID'
        >>> to_identifier("created_at")
        'CreatedAt'
    """
    words = split_words(name)
    if not words:
        raise ValueError(f"cannot derive an identifier from {name!r}")

    parts = []
    for word in words:
        upper = word.upper()
        if upper in ACRONYMS:
            parts.append(upper)
        else:
            parts.append(word[0].upper() + word[1:].lower())
    return "".join(parts)


def model_identifier(name: str) -> str:
    """Normalize an aggregate name, dropping a trailing ``Model`` suffix"""
    if name.endswith(MODEL_SUFFIX) and name != MODEL_SUFFIX:
        name = name[: -len(MODEL_SUFFIX)]
    return to_identifier(name)
