"""
Reporting Module

Human-facing rendering of batch progress and results.
"""

from .console import ConsoleReporter

__all__ = ['ConsoleReporter']
