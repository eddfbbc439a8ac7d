"""
QSL Card Manager - amateur radio contact log and QSL card designer.

Operators keep their contact (QSO) log, import ADIF and CSV logs, design
card templates and export cards as PDF or PNG.
"""

__version__ = "0.1.0"
__author__ = "QSL Card Manager Team"
__description__ = "Amateur radio QSO log and QSL card manager"

# Core imports
from .core.config import QSLCardConfig
from .core.logging import setup_logging

# Initialize logging
setup_logging()

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "QSLCardConfig",
    "setup_logging",
]
