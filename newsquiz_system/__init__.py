"""News-literacy trivia game backend: RSS headlines to true/false claim pairs."""

__version__ = "0.1.0"
