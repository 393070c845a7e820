"""Boolean circuit graphs for unsigned integer arithmetic, with supporting containers and logging."""

__version__ = "0.1.0"

__all__ = ["circuit", "garith", "guint", "htable", "logger", "mathutil", "ndarray", "slist"]