"""daybook: journal page addressing and duration tools.

Public API:
    from daybook.parsing import InputParser, DurationCalculator
    from daybook.commands import JournalCommands
"""

__version__ = "0.1.0"
