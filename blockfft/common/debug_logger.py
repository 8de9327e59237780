"""
Stage debug logging for block FFT analysis.
Records per-block transform stages with source location and data statistics
so individual windows can be traced through a run.
"""

import time
import inspect
import numpy as np
from typing import List, Union, Any
import os


def _timestamp() -> str:
    return time.strftime('%Y-%m-%dT%H:%M:%S.') + f"{int(time.time() * 1000000) % 1000000:06d}"


class BlockDebugLogger:
    """
    Debug logger for block transform stages.
    Logs with full metadata including source location, data statistics, and context.
    """

    def __init__(self, log_file: str = "blockfft_debug.log", enabled: bool = True):
        self.log_file = log_file
        self.enabled = enabled
        if enabled:
            # Clear log file and write header
            with open(log_file, 'w') as f:
                f.write(f"# blockfft Debug Log - {time.strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("# Format: [TIMESTAMP][IMPL][FILE:LINE][FUNC][BLK{nnn}] STAGE: data_type=values |META: ... |SRC: ...\n")
                f.write("#\n")

    def log_stage(self, stage: str, data_type: str, values: Union[List, np.ndarray, float, int],
                  block: int = 0, **context) -> None:
        """
        Log a processing stage with comprehensive metadata.

        Args:
            stage: Processing stage name (e.g., 'BLOCK_INPUT', 'BLOCK_OUTPUT')
            data_type: Type of data being logged (e.g., 'real', 'imag', 'descriptor')
            values: The actual data values
            block: Block index within the run
            **context: Additional context (offset, length, remainder, etc.)
        """
        if not self.enabled:
            return

        # Report the first caller outside this module
        frame_info = inspect.currentframe().f_back
        while frame_info.f_globals.get("__name__") == __name__ and frame_info.f_back is not None:
            frame_info = frame_info.f_back
        filename = os.path.basename(frame_info.f_code.co_filename)
        line_no = frame_info.f_lineno
        func_name = frame_info.f_code.co_name

        if isinstance(values, (int, float)):
            values_array = np.array([values], dtype=np.float64)
            is_scalar = True
        else:
            values_array = np.asarray(values, dtype=np.float64)
            is_scalar = False

        size = values_array.size

        if size > 0:
            min_val = float(np.min(values_array))
            max_val = float(np.max(values_array))
            sum_val = float(np.sum(values_array))
            mean_val = float(np.mean(values_array))
            nonzero_count = int(np.count_nonzero(values_array))
        else:
            min_val = max_val = sum_val = mean_val = 0.0
            nonzero_count = 0

        # Long arrays are truncated to their first and last 5 values
        if is_scalar:
            values_str = f"{values:.6f}"
        elif size <= 10:
            values_str = f"[{','.join(f'{v:.6f}' for v in values_array)}]"
        else:
            first_5 = ','.join(f'{v:.6f}' for v in values_array[:5])
            last_5 = ','.join(f'{v:.6f}' for v in values_array[-5:])
            values_str = f"[{first_5}...{last_5}]"

        context_str = " ".join(f"{key}={value}" for key, value in context.items())

        log_entry = (
            f"[{_timestamp()}][BLOCKFFT][{filename}:{line_no}][{func_name}]"
            f"[BLK{block:03d}] {stage}: "
            f"{data_type}={values_str} "
            f"|META: size={size} range=[{min_val:.6f},{max_val:.6f}] "
            f"sum={sum_val:.6f} mean={mean_val:.6f} nonzero={nonzero_count} "
            f"|SRC: {context_str}\n"
        )

        with open(self.log_file, 'a') as f:
            f.write(log_entry)

    def enable(self):
        """Enable logging."""
        self.enabled = True

    def disable(self):
        """Disable logging."""
        self.enabled = False


# Global logger instance, silent until enable_debug_logging() is called
debug_logger = BlockDebugLogger(enabled=False)


def log_debug(stage: str, data_type: str, values: Any, **kwargs) -> None:
    """
    Convenience function for logging with global logger instance.

    Usage:
        log_debug("BLOCK_OUTPUT", "real", real[offset:end],
                  block=3, offset=offset, length=length)
    """
    debug_logger.log_stage(stage, data_type, values, **kwargs)


def enable_debug_logging(log_file: str = "blockfft_debug.log") -> None:
    """
    Enable debug logging with specified log file.
    """
    global debug_logger
    debug_logger = BlockDebugLogger(log_file, enabled=True)


def disable_debug_logging() -> None:
    """
    Disable debug logging.
    """
    debug_logger.disable()
