"""
Configuration and utility functions for Simple RTS.

This module provides:
- Global configuration constants (pixel tile size, zoom limits, minimap, units)
- Logging setup with automatic file rotation
- Performance and memory monitoring utilities
- Project root path discovery

The configuration system is designed to be imported early and provide
foundational utilities used throughout the application. It never touches the
display, so the terrain generator can import it headless.
"""

import os
import logging
import sys
import time
from datetime import datetime, timedelta
from pathlib import Path
import shutil

import psutil

# ============================================================================
# CONFIGURATION CONSTANTS
# ============================================================================

# Rendering
TILE_PIXELS = 8  # Size of one fine tile at scale 1.0
DEFAULT_SCALE = 4.0
MIN_SCALE = 0.2
MAX_SCALE = 8.0
ZOOM_STEP = 0.1  # Scale change per mouse wheel notch
TILE_OVERDRAW = 0.2  # Extra scale added to drawn tiles to hide seams

# Minimap
MINIMAP_SHRINK = 6  # One minimap pixel per this many tiles
UI_BORDER = 5

# Window
WINDOW_TITLE = "Simple RTS"
WINDOW_WIDTH, WINDOW_HEIGHT = 640, 480

# Simulation
MAX_UNITS = 200
UPDATE_STEP_MS = 10  # Fixed simulation step
KEY_PAN_SPEED = 1.0  # Tiles per update at scale 1.0


# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

def setup_logging(project_root):
    """
    Configure comprehensive logging with automatic file management.

    Creates two directories:
    - log_dump/: Current logs (files less than 1 day old)
    - old_log_dump/: Archived logs (files older than 1 day)

    Log files are named: game_YYYYMMDD_HHMMSS.log

    Args:
        project_root (Path): Path to the project root directory

    Returns:
        logging.Logger: Configured logger instance for the application
    """
    log_dir = Path(project_root) / "log_dump"
    old_log_dir = Path(project_root) / "old_log_dump"

    log_dir.mkdir(exist_ok=True)
    old_log_dir.mkdir(exist_ok=True)

    # Archive old log files before starting new session
    _archive_old_logs(log_dir, old_log_dir)

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_path = log_dir / f"game_{timestamp}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        format='[%(asctime)s] - [%(name)s] - [%(levelname)s] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.FileHandler(log_path, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger('SimpleRTS')
    logger.info(f"Logging initialized. Log file: {log_path}")

    return logger


def _archive_old_logs(log_dir, archive_dir):
    """
    Move log files older than 1 day to archive directory.

    Args:
        log_dir (Path): Directory containing current logs
        archive_dir (Path): Directory for archived logs
    """
    cutoff_time = datetime.now() - timedelta(days=1)

    for log_file in log_dir.glob("*.log"):
        file_mtime = datetime.fromtimestamp(log_file.stat().st_mtime)

        if file_mtime < cutoff_time:
            dest = archive_dir / log_file.name
            shutil.move(str(log_file), str(dest))
            print(f"Archived old log: {log_file.name}")


def get_logger(name=None):
    """
    Get a logger instance for a specific module.

    This should be called at the top of each module:
        logger = get_logger(__name__)

    Args:
        name (str, optional): Logger name, typically __name__

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name or 'SimpleRTS')


def get_map_logger():
    """
    Get a specialized logger for map generation.

    Keeps terrain generation chatter (stage timings, histograms) on its own
    channel so it can be filtered separately from gameplay logs.

    Returns:
        logging.Logger: Map generation logger instance
    """
    return logging.getLogger('SimpleRTS.MapGeneration')


class PerformanceTimer:
    """
    Context manager for timing and logging operation duration.

    Usage:
        with PerformanceTimer(logger, "Operation name"):
            # ... code to time ...

    Attributes:
        logger: Logger instance to use for output
        operation_name: Name of the operation being timed
        start_time: Time when context was entered
        elapsed: Seconds spent inside the context (set on exit)
    """

    def __init__(self, logger, operation_name):
        self.logger = logger
        self.operation_name = operation_name
        self.start_time = None
        self.elapsed = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.info(f"Completed: {self.operation_name} in {self.elapsed:.3f}s")
        else:
            self.logger.error(f"Failed: {self.operation_name} after {self.elapsed:.3f}s ({exc_type.__name__})")
        return False


def log_memory_usage(logger, label="Memory usage"):
    """
    Log the resident memory of the current process.

    Args:
        logger: Logger instance for output
        label (str): Label prefix for the log message
    """
    mem_mb = psutil.Process(os.getpid()).memory_info().rss / 1024 / 1024
    logger.debug(f"{label}: {mem_mb:.1f} MB")


# ============================================================================
# PROJECT ROOT DISCOVERY
# ============================================================================

_CACHED_PROJECT_ROOT = None  # Module-level cache


def get_project_root(marker="simple_rts"):
    """
    Automatically find the project root directory.

    Searches upward from the current file location until it finds a directory
    containing the marker folder. The result is cached for subsequent calls.

    Args:
        marker (str): Directory name to search for (default: "simple_rts")

    Returns:
        str: Absolute path to project root directory

    Raises:
        FileNotFoundError: If project root cannot be found
    """
    global _CACHED_PROJECT_ROOT

    logger = get_logger(__name__)

    if _CACHED_PROJECT_ROOT:
        logger.debug(f"Using cached project root: {_CACHED_PROJECT_ROOT}")
        return _CACHED_PROJECT_ROOT

    current_dir = os.path.abspath(os.path.dirname(__file__))
    logger.debug(f"Searching for project root from: {current_dir}")

    while True:
        marker_path = os.path.join(current_dir, marker)

        if os.path.exists(marker_path):
            _CACHED_PROJECT_ROOT = current_dir
            logger.info(f"Project root found: {_CACHED_PROJECT_ROOT}")
            return _CACHED_PROJECT_ROOT

        parent_dir = os.path.dirname(current_dir)

        # Reached filesystem root
        if parent_dir == current_dir:
            logger.error(f"Project root not found (searched for '{marker}' directory)")
            raise FileNotFoundError(
                f"Could not find project root containing '{marker}' directory"
            )

        current_dir = parent_dir
