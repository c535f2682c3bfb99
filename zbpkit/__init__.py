"""Chat-bot plugin logic: drift bottles, emoji mixing, gacha rolls, song guessing, fortunes and more."""

__version__ = "0.1.0"