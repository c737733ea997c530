"""Domain models for the PharmaCode harvester.

Configuration, raw row and run result dataclasses shared by the reader,
the extraction services and the CLI.
"""

from .config_models import HarvesterConfig
from .harvest_result import HarvestResult
from .row_data import RawRow

__all__ = [
    # Configuration models
    "HarvesterConfig",
    # Processing models
    "RawRow",
    "HarvestResult",
]
