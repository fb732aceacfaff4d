"""Append-only activity log for adokeys commands."""

import sys
from datetime import datetime
from pathlib import Path

DEFAULT_LOG_NAME = 'adokeys.log'


class ActivityLog:
    """Records command events to a plain-text log file."""

    def __init__(self, log_path: Path):
        self.log_path = log_path

    @classmethod
    def in_dir(cls, config_dir: Path) -> 'ActivityLog':
        """Log stored as adokeys.log inside config_dir."""
        return cls(config_dir / DEFAULT_LOG_NAME)

    def log_event(self, message: str, level: str = 'INFO') -> None:
        """Log an event to the activity log.

        Write failures are reported on stderr and otherwise ignored.
        """
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        entry = f'[{timestamp}] {level}: {message}\n'
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, 'a', encoding='utf-8') as f:
                f.write(entry)
        except OSError as e:
            print(f"Warning: Failed to log event: {e}", file=sys.stderr)
