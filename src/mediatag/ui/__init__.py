"""User interfaces for mediatag."""
