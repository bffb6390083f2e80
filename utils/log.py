"""
Color-coded console output for the REIT dashboard.

Uses colorama for cross-platform terminal color support.
"""

import datetime
import logging
import os
import sys

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for dashboard output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    STEP = Fore.BLUE + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    INFO = Fore.WHITE
    DIM = Style.DIM
    TICKER = Fore.MAGENTA + Style.BRIGHT
    SECTOR = Fore.CYAN
    VALUE = Fore.GREEN
    POS = Fore.GREEN
    NEG = Fore.RED
    RESET = Style.RESET_ALL


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Console messages
# ---------------------------------------------------------------------------

def header(msg: str) -> None:
    """Print a bold section header."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


def step(msg: str) -> None:
    print(f"{C.STEP}[{_ts()}] >> {msg}{C.RESET}")


def info(msg: str) -> None:
    print(f"{C.DIM}[{_ts()}]{C.RESET} {msg}")


def ok(msg: str) -> None:
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def warn(msg: str) -> None:
    print(f"{C.WARN}[{_ts()}] WARN {msg}{C.RESET}")


def err(msg: str) -> None:
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


def ticker_msg(ticker: str, msg: str) -> None:
    """Print a ticker-scoped message."""
    print(f"{C.DIM}[{_ts()}]{C.RESET} {C.TICKER}{ticker}{C.RESET} {msg}")


def signed(value: float, fmt: str = "{:+.2f}%") -> str:
    """Format a number green when >= 0 and red otherwise."""
    color = C.POS if value >= 0 else C.NEG
    return f"{color}{fmt.format(value)}{C.RESET}"


def summary_table(title: str, rows: list[tuple[str, str]]) -> None:
    """Print a summary table with label-value pairs."""
    print(f"\n{C.HEADER}{title}{C.RESET}")
    max_label = max(len(r[0]) for r in rows) if rows else 0
    for label, value in rows:
        print(f"  {label:<{max_label}}  {C.VALUE}{value}{C.RESET}")
    print()


def table(headers: list[str], rows: list[list[str]]) -> None:
    """Print a plain column-aligned table."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    print("  " + "  ".join(f"{C.HEADER}{h:<{widths[i]}}{C.RESET}" for i, h in enumerate(headers)))
    print("  " + "  ".join("-" * w for w in widths))
    for row in rows:
        print("  " + "  ".join(f"{cell:<{widths[i]}}" for i, cell in enumerate(row)))
    print()


# ---------------------------------------------------------------------------
# Verbose logging setup
# ---------------------------------------------------------------------------

def setup_verbose_logging(name: str = "dashboard", level: int = logging.DEBUG) -> logging.Logger:
    """
    Create a verbose logger that writes to both console and logs/dashboard.log.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on re-import
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler (WARNING+); regular output goes through the helpers above
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.WARNING)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # File handler (DEBUG+)
    log_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "logs")
    os.makedirs(log_dir, exist_ok=True)
    fh = logging.FileHandler(os.path.join(log_dir, f"{name}.log"))
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger
