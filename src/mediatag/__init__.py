"""mediatag: media tag reading, cleaning and merging."""

__version__ = "0.1.0"
