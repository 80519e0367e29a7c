# Validators Module

from pr_validator.validators.base_validator import BaseValidator
from pr_validator.validators.description_validator import DescriptionValidator
from pr_validator.validators.unit_test_validator import UnitTestValidator
from pr_validator.validators.pr_validator import PRValidator

__all__ = [
    "BaseValidator",
    "DescriptionValidator",
    "UnitTestValidator",
    "PRValidator"
]
