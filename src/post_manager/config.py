"""
Configuration constants for the Post Manager.

This module centralizes all configurable parameters to make the client
easy to point at a different server and to tune its user-facing text.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "POSTS_API_BASE_URL", "https://back.standclass.com.br"
        )
    )
    posts_endpoint: str = "/api/posts"
    # None means no timeout at all
    timeout_seconds: Optional[float] = None


@dataclass
class DisplayConfig:
    """Text shown to the user by the CLI and the form controller."""
    summary_template: str = "{title}\n{date} • {read_time}"
    empty_message: str = "No posts yet."
    loading_message: str = "Loading..."
    load_failed_message: str = "Failed to load posts"
    delete_title: str = "Delete post?"
    delete_message: str = "This action cannot be undone."
    create_label: str = "Create"
    update_label: str = "Update"
    saving_label: str = "Saving..."
    required_template: str = "Enter {label}"

    # Wire field name -> human label
    field_labels: Dict[str, str] = field(default_factory=lambda: {
        "date": "Date",
        "title": "Title",
        "readTime": "Read time",
    })


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "post_manager.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
