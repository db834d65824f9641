import os
import time
from datetime import date
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)

LOG_FILE_PREFIX = "white_noise_player"


class PlayerConfig(BaseModel):
    sample_path: Path = Field(default=Path("noise.wav"), description="Looping sample to play")
    volume_step_db: float = Field(default=2.0, gt=0, description="Decibels added or removed per volume command")
    volume_min_db: Optional[float] = Field(default=None, description="Lowest level the controls will request (unbounded if unset)")
    volume_max_db: Optional[float] = Field(default=None, description="Highest level the controls will request (unbounded if unset)")
    volume_tween_ms: int = Field(default=250, ge=0, description="Duration of a volume change ramp")
    stop_tween_ms: int = Field(default=500, ge=0, description="Duration of the fade-out on quit")
    stop_settle_ms: int = Field(default=500, ge=0, description="Wait after the fade-out before releasing the device")
    input_pacing_ms: int = Field(default=500, ge=0, description="Pause between console commands")
    shutdown_settle_ms: int = Field(default=1000, ge=0, description="How long the console waits for playback to finish on quit")
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[Path] = Field(default=Path("logs"), description="Directory for the error log file (disabled if unset)")
    log_retention_days: int = Field(default=7, ge=0, description="Days to keep old log files")

    @model_validator(mode="after")
    def _check_volume_bounds(self) -> "PlayerConfig":
        if (
            self.volume_min_db is not None
            and self.volume_max_db is not None
            and self.volume_min_db > self.volume_max_db
        ):
            raise ValueError("VOLUME_MIN_DB must not exceed VOLUME_MAX_DB")
        return self


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


def load_config(config_path: Optional[Path] = None) -> PlayerConfig:
    if config_path is None:
        config_path = Path(".env")

    if config_path.exists():
        load_dotenv(config_path)
        logger.info(f"Loaded environment variables from {config_path}")
    else:
        logger.warning(f"Config file {config_path} not found, using environment variables only")

    try:
        log_dir = os.getenv("LOG_DIR", "logs")
        return PlayerConfig(
            sample_path=Path(os.getenv("SAMPLE_PATH", "noise.wav")),
            volume_step_db=float(os.getenv("VOLUME_STEP_DB", "2.0")),
            volume_min_db=_optional_float("VOLUME_MIN_DB"),
            volume_max_db=_optional_float("VOLUME_MAX_DB"),
            volume_tween_ms=int(os.getenv("VOLUME_TWEEN_MS", "250")),
            stop_tween_ms=int(os.getenv("STOP_TWEEN_MS", "500")),
            stop_settle_ms=int(os.getenv("STOP_SETTLE_MS", "500")),
            input_pacing_ms=int(os.getenv("INPUT_PACING_MS", "500")),
            shutdown_settle_ms=int(os.getenv("SHUTDOWN_SETTLE_MS", "1000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir) if log_dir else None,
            log_retention_days=int(os.getenv("LOG_RETENTION_DAYS", "7")),
        )

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise


def create_example_env_file(path: Path = Path(".env.example")):
    example_content = """# Looping sample (PCM WAV)
SAMPLE_PATH=noise.wav

# Volume control, in decibels
VOLUME_STEP_DB=2.0
# Optional bounds for the requested level; leave empty for unbounded
VOLUME_MIN_DB=
VOLUME_MAX_DB=

# Ramp durations in milliseconds
VOLUME_TWEEN_MS=250
STOP_TWEEN_MS=500
STOP_SETTLE_MS=500

# Console pacing and shutdown wait in milliseconds
INPUT_PACING_MS=500
SHUTDOWN_SETTLE_MS=1000

# Logging level
LOG_LEVEL=INFO

# Error log directory (empty disables the log file) and retention in days
LOG_DIR=logs
LOG_RETENTION_DAYS=7
"""

    with open(path, "w") as f:
        f.write(example_content)

    logger.info(f"Created example environment file at {path}")


def remove_old_logs(log_dir: Path, retention_days: int) -> int:
    """Delete player log files older than `retention_days`. Returns how many were removed."""
    cutoff = time.time() - retention_days * 86400
    removed = 0
    for log_file in log_dir.glob(f"{LOG_FILE_PREFIX}-*.log"):
        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                removed += 1
        except OSError as e:
            logger.warning(f"Could not remove old log {log_file}: {e}")
    return removed


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    retention_days: int = 7,
    console_handler: Optional[logging.Handler] = None,
):
    handlers: list[logging.Handler] = [console_handler or logging.StreamHandler()]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        remove_old_logs(log_dir, retention_days)
        file_handler = logging.FileHandler(
            log_dir / f"{LOG_FILE_PREFIX}-{date.today():%Y%m%d}.log",
            mode="a",
            encoding="utf-8",
        )
        file_handler.setLevel(logging.ERROR)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def flush_logging() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()
