"""
Text formatting utilities for review summaries.
"""

import math
import re


class TextProcessor:
    """Text formatting helpers."""

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """Format a byte count as a short human-readable string."""
        if size_bytes <= 0:
            return "0 Bytes"

        units = ["Bytes", "KB", "MB", "GB"]
        index = min(int(math.floor(math.log(size_bytes, 1024))), len(units) - 1)
        value = round(size_bytes / math.pow(1024, index), 2)
        # 2.0 -> "2", 2.5 -> "2.5"
        text = f"{value:.2f}".rstrip("0").rstrip(".")
        return f"{text} {units[index]}"

    @staticmethod
    def humanize_field_name(name: str) -> str:
        """Turn a camelCase field name into a label (``pageCount`` -> ``Page Count``)."""
        if not name:
            return ""
        spaced = re.sub(r"([A-Z])", r" \1", name).strip()
        return spaced[:1].upper() + spaced[1:]
