# Models Module

from pr_validator.models.annotation import (
    AnnotationLevel,
    Annotation
)

from pr_validator.models.report import DangerReport

from pr_validator.models.pull_request import (
    FileChanges,
    PRMetadata
)

__all__ = [
    # Enums
    "AnnotationLevel",

    # Annotation models
    "Annotation",
    "DangerReport",

    # Pull request models
    "FileChanges",
    "PRMetadata"
]
