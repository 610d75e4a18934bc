"""GardenBred background worker: advances plot growth stages."""

__version__ = "0.1.0"
