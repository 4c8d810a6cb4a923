"""pawnstorm — chess rules engine with a small alpha-beta opponent."""

__version__ = "0.1.0"
