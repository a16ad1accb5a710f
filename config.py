"""
Configuration module for environment variable validation and type-safe config.

Table name and primary key are read once per process. They are not required
here: a missing value surfaces as a DynamoDB error on the first store call.
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Type-safe configuration object with validated environment variables."""

    table_name: str = ""
    primary_key: str = ""
    aws_region: str = "us-east-1"
    log_level: str = "INFO"
    max_sweep_pages: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Raises:
            ValueError: If LOG_LEVEL is not a valid logging level,
                or MAX_SWEEP_PAGES is not a positive integer.
        """
        table_name = os.environ.get("TABLE_NAME", "")
        primary_key = os.environ.get("PRIMARY_KEY", "")
        aws_region = os.environ.get("AWS_REGION", "us-east-1")
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_log_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}"
            )

        # Unset means the delete-all sweep runs until the table is empty
        max_sweep_pages = None
        raw_max_pages = os.environ.get("MAX_SWEEP_PAGES", "").strip()
        if raw_max_pages:
            try:
                max_sweep_pages = int(raw_max_pages)
            except ValueError:
                max_sweep_pages = 0
            if max_sweep_pages < 1:
                raise ValueError(
                    f"MAX_SWEEP_PAGES must be a positive integer, got: {raw_max_pages}"
                )

        return cls(
            table_name=table_name,
            primary_key=primary_key,
            aws_region=aws_region,
            log_level=log_level,
            max_sweep_pages=max_sweep_pages,
        )


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If LOG_LEVEL is invalid.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
