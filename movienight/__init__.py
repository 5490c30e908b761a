"""Movie night: nominate films, vote with a limited approval ballot, rank results."""

__version__ = "0.1.0"
