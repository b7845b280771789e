"""Logging, performance monitoring and preview drawing."""
from .logger import LoggingConfig, set_log_level, setup_logging
from .performance import PerformanceMonitor, Timer

__all__ = ["LoggingConfig", "set_log_level", "setup_logging", "PerformanceMonitor", "Timer"]
