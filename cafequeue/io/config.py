"""Configuration loading utility (reuses cafequeue.config)."""

# Re-export from the config module
from cafequeue.config import QueueConfig, load_config

__all__ = ["load_config", "QueueConfig"]
