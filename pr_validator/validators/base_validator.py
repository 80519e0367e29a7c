# Base Validator Class

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional

from pr_validator.config.settings import Settings, get_settings
from pr_validator.models.annotation import Annotation
from pr_validator.models.pull_request import PRMetadata
from pr_validator.utils.logger import setup_logger, log_exception


class BaseValidator(ABC):
    """Abstract base class for pull request validators"""

    name = "base"

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize validator

        Args:
            settings: Settings to read thresholds and paths from
        """
        self.settings = settings or get_settings()
        self.logger = setup_logger(f"validators.{self.name}")

    @abstractmethod
    def get_checkpoints(self) -> List[Dict[str, Any]]:
        """
        Get the ordered list of checkpoints run by this validator

        Returns:
            Checkpoint definitions with ``id``, ``name`` and optional ``enabled``
        """
        pass

    def is_enabled(self, checkpoint: Dict[str, Any]) -> bool:
        """Check if a checkpoint is enabled in its definition and in settings"""
        return checkpoint.get("enabled", True) and checkpoint["id"] not in self.settings.DISABLED_CHECKS

    def run_checks(self, pr: PRMetadata) -> List[Annotation]:
        """
        Run every enabled checkpoint against a pull request

        Args:
            pr: Pull request metadata

        Returns:
            Annotations of all checkpoints, in checkpoint order
        """
        annotations: List[Annotation] = []

        for checkpoint in self.get_checkpoints():
            if not self.is_enabled(checkpoint):
                self.logger.debug(f"Skipping disabled checkpoint: {checkpoint['name']}")
                continue

            result = self.validate_checkpoint(pr, checkpoint)
            annotations.extend(result)

            self.logger.debug(
                f"Checkpoint '{checkpoint['name']}' completed with {len(result)} annotation(s)"
            )

        return annotations

    def validate_checkpoint(self, pr: PRMetadata, checkpoint: Dict[str, Any]) -> List[Annotation]:
        """
        Run a single checkpoint

        The checkpoint ``id`` selects the ``check_<id>`` method. An unexpected
        error skips the checkpoint so the remaining ones still run.

        Args:
            pr: Pull request metadata
            checkpoint: Checkpoint definition

        Returns:
            Annotations produced by the checkpoint
        """
        method_name = f"check_{checkpoint['id']}"
        check = getattr(self, method_name, None)

        if check is None:
            raise NotImplementedError(f"{type(self).__name__} has no {method_name}")

        try:
            return list(check(pr))
        except Exception as e:
            log_exception(self.logger, e, {"checkpoint": checkpoint["id"]})
            return []
