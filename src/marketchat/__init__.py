"""Direct messaging between buyers and listing owners on the book marketplace."""

__version__ = "0.1.0"
