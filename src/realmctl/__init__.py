"""realmctl: switch between World of Warcraft clients and share data between them."""

__version__ = "0.3.0"
