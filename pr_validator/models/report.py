# Danger Report Model

from dataclasses import dataclass, field
from typing import List, Dict, Any, Iterable

from pr_validator.models.annotation import Annotation, AnnotationLevel


@dataclass
class DangerReport:
    """
    Ordered collection of annotations produced during one run.

    Failures recorded before the run (e.g. by an earlier rules file) are
    kept in ``existing_failures`` and count towards ``has_failures``.
    """
    annotations: List[Annotation] = field(default_factory=list)
    existing_failures: List[Annotation] = field(default_factory=list)

    def add(self, annotation: Annotation) -> None:
        """Append a single annotation"""
        self.annotations.append(annotation)

    def extend(self, annotations: Iterable[Annotation]) -> None:
        """Append annotations preserving their order"""
        self.annotations.extend(annotations)

    def fail(self, text: str, file: str = None, line: int = None) -> None:
        self.add(Annotation.failure(text, file, line))

    def warn(self, text: str, file: str = None, line: int = None) -> None:
        self.add(Annotation.warning(text, file, line))

    def message(self, text: str, file: str = None, line: int = None) -> None:
        self.add(Annotation.message(text, file, line))

    def markdown(self, text: str) -> None:
        self.add(Annotation.markdown(text))

    def _by_level(self, level: AnnotationLevel) -> List[Annotation]:
        return [a for a in self.annotations if a.level == level]

    @property
    def fails(self) -> List[Annotation]:
        """All failures, pre-existing first"""
        return self.existing_failures + self._by_level(AnnotationLevel.FAILURE)

    @property
    def warnings(self) -> List[Annotation]:
        return self._by_level(AnnotationLevel.WARNING)

    @property
    def messages(self) -> List[Annotation]:
        return self._by_level(AnnotationLevel.MESSAGE)

    @property
    def markdowns(self) -> List[Annotation]:
        return self._by_level(AnnotationLevel.MARKDOWN)

    @property
    def has_failures(self) -> bool:
        """Check if any failure exists, from this run or before it"""
        return bool(self.fails)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Danger results JSON"""
        return {
            "fails": [a.to_dict() for a in self.fails],
            "warnings": [a.to_dict() for a in self.warnings],
            "messages": [a.to_dict() for a in self.messages],
            "markdowns": [a.to_dict() for a in self.markdowns]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DangerReport':
        """
        Create from Danger results JSON

        Failures become ``existing_failures``; the other levels are kept
        as annotations of this report.
        """
        report = cls(
            existing_failures=[
                Annotation.from_dict(AnnotationLevel.FAILURE, entry)
                for entry in data.get("fails", [])
            ]
        )
        for level in (AnnotationLevel.WARNING, AnnotationLevel.MESSAGE, AnnotationLevel.MARKDOWN):
            report.extend(Annotation.from_dict(level, entry) for entry in data.get(level.value, []))
        return report
