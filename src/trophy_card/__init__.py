"""trophy-card: GitHub profile statistics as an SVG trophy card."""

__version__ = "0.1.0"
