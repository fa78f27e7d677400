"""Line-oriented frontmatter editing.

This never parses the YAML between the delimiters: it only locates the
`---` lines and inserts text between them, so the rest of the note is kept
byte for byte.
"""

from typing import Any

import yaml

DELIMITER = "---"


def _is_delimiter(line: str) -> bool:
    return line.strip() == DELIMITER


def _closing_index(lines: list[str]) -> int | None:
    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            return i
    return None


def inject_property(body: str, line: str) -> str:
    """
    Insert a `key: value` line into the note's frontmatter block.

    - Closed block: the line becomes the last line of the block.
    - Unclosed block (opening `---` only): the line goes right after the
      opening delimiter.
    - No block: a new one is prepended, followed by a blank line.

    Existing keys are not checked, so injecting the same key twice leaves two
    lines for it.
    """
    lines = body.split("\n")

    if not _is_delimiter(lines[0]):
        return f"{DELIMITER}\n{line}\n{DELIMITER}\n\n" + body

    closing = _closing_index(lines)
    if closing is None:
        # unclosed block: keep it open, insert after the opening delimiter
        lines.insert(1, line)
    else:
        lines.insert(closing, line)
    return "\n".join(lines)


def property_line(name: str, value: Any) -> str:
    """
    Render a single frontmatter line, e.g. ``property_line("week", 5)`` gives
    ``"week: 5"``. Names that need quoting in YAML are quoted.

    Raises ValueError if YAML cannot write the property on a single line
    (long keys switch to the "? key" form).
    """
    dumped = yaml.safe_dump(
        {name: value}, sort_keys=False, allow_unicode=True, width=float("inf")
    ).rstrip("\n")
    if "\n" in dumped:
        raise ValueError(f"Property {name!r} does not fit on one frontmatter line")
    return dumped
