"""meshstack - service-mesh platform bootstrapper and Helm deployment CLI."""

__version__ = "0.3.0"
