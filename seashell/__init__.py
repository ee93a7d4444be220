"""seashell - small interactive command interpreter with pipes and redirection."""

__version__ = "1.0.0"
