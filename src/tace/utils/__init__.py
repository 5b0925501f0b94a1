"""Utilities package for the TACE dashboard."""
from .logging_setup import TRACE, PipelineLogger, get_logger, log_check, log_function_call, setup_logging

__all__ = ["TRACE", "PipelineLogger", "get_logger", "log_check", "log_function_call", "setup_logging"]
