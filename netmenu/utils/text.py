"""Text helpers for scraping CLI output."""

import re

ANSI_ESCAPE_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")

STRENGTH_SYMBOLS = ["_", "▂", "▄", "▆", "█"]


def strip_ansi(text):
    """Remove ANSI color codes, as emitted by iwctl."""
    return ANSI_ESCAPE_RE.sub("", text)


def convert_network_strength(signal):
    """
    Convert an iwctl star rating ("****") into NetworkManager style bars.

    The first bar is always lit; each further bar needs one more star.
    """
    stars = len(signal) - len(signal.rstrip("*"))
    bars = [STRENGTH_SYMBOLS[1]]
    for level in (2, 3, 4):
        bars.append(STRENGTH_SYMBOLS[level] if stars >= level else STRENGTH_SYMBOLS[0])
    return "".join(bars)
