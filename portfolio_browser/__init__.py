"""Portfolio Browser - a multi-tab browser simulator for a developer portfolio."""

__version__ = "0.1.0"
