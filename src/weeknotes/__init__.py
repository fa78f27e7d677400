"""weeknotes - daily and weekly notes for a Markdown vault."""

__version__ = "0.1.0"
