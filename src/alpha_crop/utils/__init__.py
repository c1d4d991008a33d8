"""alpha-crop utility modules."""

from .logging_utils import BatchProgress, console, setup_logging

__all__ = ['BatchProgress', 'console', 'setup_logging']
