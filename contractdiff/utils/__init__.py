from contractdiff.utils.values import values_equal

__all__ = ["values_equal"]
