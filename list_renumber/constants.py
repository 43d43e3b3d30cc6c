"""Constants used across the list-renumber package."""

from __future__ import annotations

import re

from .config import RenumberConfig

DEFAULT_CONFIG = RenumberConfig()

# Numbered-list marker at the start of a line; config-aware patterns live in the classifier.
LIST_ITEM_PATTERN = re.compile(r"^(?P<indent>[ \t]*)(?P<number>[0-9]+)(?P<delimiter>[.]) ")
CODE_FENCE_PATTERN = re.compile(r"^(?P<indent>\s{0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
CLOSING_FENCE_MAX_INDENT = 3

DEFAULT_DELIMITERS = DEFAULT_CONFIG.delimiters
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length

DOCUMENT_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt", ".text")
