# Annotation Model

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


class AnnotationLevel(Enum):
    """Annotation levels, in the order Danger renders them"""
    FAILURE = "fails"
    WARNING = "warnings"
    MESSAGE = "messages"
    MARKDOWN = "markdowns"


@dataclass(frozen=True)
class Annotation:
    """A single warning, failure, message or markdown block attached to a PR"""
    level: AnnotationLevel
    text: str
    file: Optional[str] = None
    line: Optional[int] = None

    @property
    def is_failure(self) -> bool:
        """Check if this annotation fails the build"""
        return self.level == AnnotationLevel.FAILURE

    @classmethod
    def failure(cls, text: str, file: Optional[str] = None, line: Optional[int] = None) -> 'Annotation':
        return cls(AnnotationLevel.FAILURE, text, file, line)

    @classmethod
    def warning(cls, text: str, file: Optional[str] = None, line: Optional[int] = None) -> 'Annotation':
        return cls(AnnotationLevel.WARNING, text, file, line)

    @classmethod
    def message(cls, text: str, file: Optional[str] = None, line: Optional[int] = None) -> 'Annotation':
        return cls(AnnotationLevel.MESSAGE, text, file, line)

    @classmethod
    def markdown(cls, text: str) -> 'Annotation':
        return cls(AnnotationLevel.MARKDOWN, text)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a Danger results entry"""
        data: Dict[str, Any] = {"message": self.text}
        if self.file:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        return data

    @classmethod
    def from_dict(cls, level: AnnotationLevel, data: Dict[str, Any]) -> 'Annotation':
        """Create from a Danger results entry"""
        return cls(
            level=level,
            text=data.get("message", ""),
            file=data.get("file"),
            line=data.get("line")
        )
