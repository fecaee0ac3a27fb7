from .dicts import deep_merge
from .format import format_validation_error

__all__ = ["deep_merge", "format_validation_error"]
