"""PharmaCode harvester: GTIN -> PharmaCode mapping extraction from spreadsheets."""

__version__ = "0.1.0"
