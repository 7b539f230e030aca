"""LearnHub e-learning storefront."""

__version__ = "0.1.0"
