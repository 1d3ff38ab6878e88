from .validation import DatasetValidationResult, validate_dataset

__all__ = ["DatasetValidationResult", "validate_dataset"]
