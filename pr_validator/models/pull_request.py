# Pull Request Metadata Model

from dataclasses import dataclass, field
from functools import cached_property
from typing import Tuple, Dict, Any, Optional, Callable


@dataclass(frozen=True)
class FileChanges:
    """Paths touched by a pull request, grouped by change kind"""
    modified: Tuple[str, ...] = ()
    created: Tuple[str, ...] = ()
    deleted: Tuple[str, ...] = ()

    @classmethod
    def from_github_files(cls, files: Any) -> 'FileChanges':
        """
        Build from the GitHub "list pull request files" response

        Args:
            files: Iterable of file objects with ``filename`` and ``status``

        Returns:
            Grouped file changes
        """
        modified, created, deleted = [], [], []
        for entry in files:
            status = entry.get("status", "modified")
            filename = entry.get("filename", "")
            if not filename:
                continue
            if status == "added":
                created.append(filename)
            elif status == "removed":
                deleted.append(filename)
            else:
                # modified, renamed, copied and changed all edit an existing path
                modified.append(filename)
        return cls(tuple(modified), tuple(created), tuple(deleted))


FileLoader = Callable[[], FileChanges]


@dataclass(frozen=True)
class PRMetadata:
    """
    Read-only view of a pull request for one validation run.

    Counts are trusted as supplied by the provider. The file lists are
    fetched through ``file_loader`` on first access and cached.
    """
    additions: int
    deletions: int
    changed_files: int
    title: str
    body: Optional[str] = None
    assignee: Optional[str] = None
    number: Optional[int] = None
    author: Optional[str] = None
    base_ref: Optional[str] = None
    head_ref: Optional[str] = None
    files: Optional[FileChanges] = None
    file_loader: Optional[FileLoader] = field(default=None, repr=False, compare=False)

    @cached_property
    def file_changes(self) -> FileChanges:
        """Touched files, loaded once"""
        if self.files is not None:
            return self.files
        if self.file_loader is not None:
            return self.file_loader()
        return FileChanges()

    @property
    def modified_files(self) -> Tuple[str, ...]:
        return self.file_changes.modified

    @property
    def created_files(self) -> Tuple[str, ...]:
        return self.file_changes.created

    @property
    def edited_files(self) -> Tuple[str, ...]:
        """Modified files followed by created files"""
        return self.modified_files + self.created_files

    @property
    def description(self) -> str:
        """PR body with absent treated as empty"""
        return self.body or ""

    @property
    def lines_changed(self) -> int:
        return self.additions + self.deletions

    @property
    def has_assignee(self) -> bool:
        return self.assignee is not None

    @classmethod
    def from_github_payload(cls, data: Dict[str, Any], file_loader: Optional[FileLoader] = None) -> 'PRMetadata':
        """
        Create from a GitHub pull request object

        Args:
            data: ``pull_request`` object from the event payload or REST API
            file_loader: Callable returning the PR's file changes

        Returns:
            PR metadata
        """
        assignee = data.get("assignee")
        if not assignee and data.get("assignees"):
            assignee = data["assignees"][0]

        return cls(
            additions=int(data.get("additions", 0)),
            deletions=int(data.get("deletions", 0)),
            changed_files=int(data.get("changed_files", 0)),
            title=data.get("title") or "",
            body=data.get("body"),
            assignee=assignee.get("login") if assignee else None,
            number=data.get("number"),
            author=(data.get("user") or {}).get("login"),
            base_ref=(data.get("base") or {}).get("ref"),
            head_ref=(data.get("head") or {}).get("ref"),
            file_loader=file_loader
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (does not trigger the file loader)"""
        return {
            "number": self.number,
            "title": self.title,
            "author": self.author,
            "assignee": self.assignee,
            "additions": self.additions,
            "deletions": self.deletions,
            "changed_files": self.changed_files,
            "base_ref": self.base_ref,
            "head_ref": self.head_ref
        }
