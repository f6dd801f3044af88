"""Logging utilities for the LMC scanner."""

from common.logging.logger import setup_logger, get_logger, JsonFormatter

__all__ = ['setup_logger', 'get_logger', 'JsonFormatter']
