"""Community Fund vote service for the staking pool."""

__version__ = "0.1.0"
