from .json_patch import apply_patch
from .validation import collect_error_details, validate_update, VALIDATION_TITLE

__all__ = ["apply_patch", "collect_error_details", "validate_update", "VALIDATION_TITLE"]
