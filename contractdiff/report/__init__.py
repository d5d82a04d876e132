from .text import TextReport

__all__ = ["TextReport"]
