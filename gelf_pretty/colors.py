"""ANSI styling — decorate text by semantic category, switchable at call time."""

# ANSI SGR codes
BOLD = "1"
RED = "31"
GREEN = "32"
YELLOW = "33"
MAGENTA = "35"
CYAN = "36"
BRIGHT_RED = "91"
RESET = "\033[0m"

LEVEL_COLORS = {
    0: BRIGHT_RED,  # EMERGENCY
    1: BRIGHT_RED,  # ALERT
    2: BRIGHT_RED,  # CRITICAL
    3: RED,         # ERROR
    4: YELLOW,      # WARNING
    5: YELLOW,      # NOTICE
    6: GREEN,       # INFO
    7: CYAN,        # DEBUG
}

MESSAGE = "message"
FIELD = "field"

CATEGORY_CODES = {
    MESSAGE: (BOLD,),
    FIELD: (MAGENTA,),
}


def sgr(*codes: str) -> str:
    """Build an ANSI Select Graphic Rendition escape sequence."""
    return f"\033[{';'.join(codes)}m"


class Colorizer:
    """Wraps text in ANSI codes while ``enabled`` is true.

    The flag is read on every call, so flipping it affects subsequent output
    without rebuilding anything.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def _wrap(self, text: str, codes: tuple[str, ...]) -> str:
        if not self.enabled or not codes or not text:
            return text
        return f"{sgr(*codes)}{text}{RESET}"

    def decorate(self, text: str, category: str) -> str:
        """Style ``text`` for a named category; unknown categories are left plain."""
        return self._wrap(text, CATEGORY_CODES.get(category, ()))

    def level(self, text: str, level: int) -> str:
        """Style a level name in its severity color, bold."""
        color = LEVEL_COLORS.get(level)
        codes = (color, BOLD) if color else (BOLD,)
        return self._wrap(text, codes)
