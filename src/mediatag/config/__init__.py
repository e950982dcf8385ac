"""Configuration surface for mediatag."""
