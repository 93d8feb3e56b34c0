"""cardbot -- GroupMe webhook that replies to [[card name]] references."""

__version__ = "1.0.0"
