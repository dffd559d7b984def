"""Console logging utilities for quirk8 sessions.

Provides a small leveled console logger used for interpreter diagnostics
(unknown opcodes, truncated ROMs) and a tqdm progress bar that can be driven
from inside jitted ``lax.scan`` loops through ``io_callback``.
"""

import sys
import time
from typing import Any, Callable, Dict, Optional, Tuple

import jax
from jax.experimental import io_callback
from tqdm import tqdm


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConsoleLogger:
    """Leveled console logger with optional colors and timestamps."""

    def __init__(
        self,
        name: str = "quirk8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.stream = stream
        self.log_level = log_level.upper()
        out = stream or sys.stdout
        self.use_colors = use_colors and hasattr(out, "isatty") and out.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        palette = {
            "DEBUG": "\033[36m",
            "INFO": "\033[32m",
            "WARNING": "\033[33m",
            "ERROR": "\033[31m",
            "CRITICAL": "\033[35m",
            "RESET": "\033[0m",
        }
        self.colors = palette if self.use_colors else {k: "" for k in palette}
        self.level_order = {level: rank for rank, level in enumerate(LEVELS)}

    def set_level(self, log_level: str):
        level = log_level.upper()
        if level not in self.level_order:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = level

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{self.colors.get(level.upper(), '')}{level_str}{self.colors['RESET']}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream or sys.stdout, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class EmulatorLogger(ConsoleLogger):
    """Logger with helpers for interpreter events."""

    def log_session_start(self, config: Dict[str, Any]):
        """Log session configuration."""
        self.info("Starting session:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")

    def log_rom_loaded(self, size: int, loaded: int):
        if loaded < size:
            self.warning(
                f"ROM is {size} bytes but only {loaded} fit above 0x200; "
                f"truncated {size - loaded} bytes"
            )
        else:
            self.debug(f"Loaded {loaded} byte ROM at 0x200")

    def log_unknown_opcode(self, pc: int, opcode: int):
        self.warning(f"Unknown opcode 0x{int(opcode):04X} at 0x{int(pc):03X}, ignored")


_logger = EmulatorLogger()


def get_logger() -> EmulatorLogger:
    """Return the package logger."""
    return _logger


def set_log_level(log_level: str):
    _logger.set_level(log_level)


def report_unknown_opcode(pc: jax.Array, opcode: jax.Array):
    """Log an unknown opcode from traced code."""
    jax.debug.callback(_logger.log_unknown_opcode, pc, opcode)


def build_tqdm_progress_bar(
    n: int,
    print_rate: Optional[int] = None,
    desc: Optional[str] = None,
    **kwargs,
) -> Tuple[Callable, Callable]:
    """Build a tqdm progress bar for a jitted loop of ``n`` iterations."""
    if desc is None:
        desc = f"Running ({n:,} frames)"

    for kwarg in ("total", "mininterval", "maxinterval", "miniters"):
        kwargs.pop(kwarg, None)

    bars = {}

    if print_rate is None:
        print_rate = max(1, min(n // 20, 50))
    else:
        print_rate = max(1, min(print_rate, n))

    remainder = n % print_rate

    def _open():
        bars[0] = tqdm(total=n, desc=desc, unit="frame", **kwargs)

    def _advance(steps):
        if 0 in bars:
            bars[0].update(int(steps))

    def _close():
        if 0 in bars:
            bars.pop(0).close()

    def update_progress_bar(iter_num):
        jax.lax.cond(
            iter_num == 0,
            lambda: io_callback(_open, None, ordered=True),
            lambda: None,
        )
        jax.lax.cond(
            (iter_num + 1) % print_rate == 0,
            lambda: io_callback(_advance, None, print_rate, ordered=True),
            lambda: None,
        )
        jax.lax.cond(
            (iter_num == n - 1) & (remainder > 0),
            lambda: io_callback(_advance, None, remainder, ordered=True),
            lambda: None,
        )

    def close_progress_bar(result, iter_num):
        jax.lax.cond(
            iter_num == n - 1,
            lambda: io_callback(_close, None, ordered=True),
            lambda: None,
        )
        return result

    return update_progress_bar, close_progress_bar


def scan_with_progress(
    n: int,
    print_rate: Optional[int] = None,
    desc: Optional[str] = None,
    **tqdm_kwargs,
) -> Callable:
    """Decorator adding a progress bar to a ``lax.scan`` body.

    The scanned ``xs`` must be the iteration number (or a tuple starting with it).
    """
    update_progress_bar, close_progress_bar = build_tqdm_progress_bar(
        n, print_rate, desc, **tqdm_kwargs
    )

    def _decorator(func):
        def wrapper(carry, x):
            iter_num = x[0] if isinstance(x, tuple) else x
            update_progress_bar(iter_num)
            result = func(carry, x)
            return close_progress_bar(result, iter_num)

        return wrapper

    return _decorator
