"""
Console front end for batch rolls.
"""
from .reporter import ConsoleReporter

__all__ = ["ConsoleReporter"]
