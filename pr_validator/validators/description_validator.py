# Description Validator

from typing import List, Dict, Any

from pr_validator.models.annotation import Annotation
from pr_validator.models.pull_request import PRMetadata
from pr_validator.validators.base_validator import BaseValidator

MISSING_DESCRIPTION = "Please provide a summary in the Pull Request description"


class DescriptionValidator(BaseValidator):
    """Requires a non-empty PR description"""

    name = "description"

    def get_checkpoints(self) -> List[Dict[str, Any]]:
        return [
            {"id": "description_present", "name": "Description present"}
        ]

    def check_description_present(self, pr: PRMetadata) -> List[Annotation]:
        if not pr.description:
            return [Annotation.failure(MISSING_DESCRIPTION)]
        return []
