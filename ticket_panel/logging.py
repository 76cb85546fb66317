import logging
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import discord


def setup_logging(level: int = logging.INFO, log_dir: Path | str = "logs") -> Path:
    """Set up the logging configuration.

    This configures the root logger to output to both the console (via discord.utils)
    and a unique timestamped log file in the log directory.

    Returns:
        The path of the log file opened for this session.
    """
    # 1. Create logs directory if it doesn't exist
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True)

    # 2. Generate timestamped filename for this session
    timestamp = datetime.now(ZoneInfo("UTC")).strftime("%Y-%m-%d_%H-%M-%S")
    log_file = log_dir / f"tickets_{timestamp}.log"

    # 3. Setup Console Logging (Standard Discord format)
    # root=True ensures we capture logs from all libraries (discord, aiohttp, etc.)
    discord.utils.setup_logging(level=level, root=True)

    # 4. Setup File Logging
    dt_fmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("[{asctime}] [{levelname:<8}] {name}: {message}", dt_fmt, style="{")

    file_handler = logging.FileHandler(filename=log_file, encoding="utf-8", mode="w")
    file_handler.setFormatter(formatter)
    logging.getLogger().addHandler(file_handler)

    return log_file
