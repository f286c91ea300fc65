import os

from colorama import Fore, Style, init

# Maps a log type to a terminal colour.
COLOR_MAP = {
    "default": Fore.WHITE,
    "progress": Fore.GREEN,
    "info": Fore.CYAN,
    "verbose": Fore.BLUE,
    "warning": Fore.YELLOW,
    "error": Fore.RED,
    "success": Fore.GREEN + Style.BRIGHT,
    "highlight": Fore.YELLOW + Style.BRIGHT,
    "caller": Fore.BLACK + Style.DIM,
}


def init_colorama():
    """Initialize colorama for the current terminal.

    Set COLORAMA_STRIP=0 to keep ANSI codes when stdout is piped.
    """
    keep_codes = os.environ.get("COLORAMA_STRIP", "").lower() == "0"
    init(autoreset=True, strip=not keep_codes, convert=False if keep_codes else None)


def get_color(log_type: str) -> str:
    """Returns the colorama color code for a log type, or white if not found.

    Args:
        log_type: Log type key (e.g., 'info', 'warning', 'error').

    Returns:
        Colorama color code string.
    """
    return COLOR_MAP.get(log_type, Fore.WHITE)
