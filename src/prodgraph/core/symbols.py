"""
Symbol classification helpers.

A label of the form ``<text>`` with non-empty text is a non-terminal
placeholder; anything else is a terminal.
"""


def is_enclosed(text: str, prefix: str, suffix: str) -> bool:
    """
    Check that text starts with prefix, ends with suffix and has content between.

    Params:
        text: String to test
        prefix: Required opening delimiter
        suffix: Required closing delimiter

    Returns:
        True if something non-empty sits between prefix and suffix
    """
    return (
        len(text) > len(prefix) + len(suffix)
        and text.startswith(prefix)
        and text.endswith(suffix)
    )


def is_placeholder(label: str | None) -> bool:
    """Return True if label is a non-terminal placeholder such as ``<expr>``."""
    return label is not None and is_enclosed(label, "<", ">")


def full_name(name: str) -> str:
    """Wrap a bare rule name in angle brackets."""
    return f"<{name}>"
