"""Shared request/response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ChatMessage(_Frozen):
    """One prior turn of a conversation supplied by the caller."""

    role: str = Field(..., description="Usually 'user' or 'assistant'.")
    content: str


class ChatRequest(_Frozen):
    """Canonical chat request routed to a provider adapter."""

    provider: str = Field(..., description="Identifier of the provider adapter to use.")
    api_key: str | None = None
    prompt: str
    history: list[ChatMessage] = Field(
        default_factory=list, description="Prior turns, oldest first."
    )
    model: str | None = Field(default=None, description="Overrides the provider default model.")


class ChatResponse(_Frozen):
    """Normalized response coming back from providers."""

    content: str
    supported: bool = Field(
        default=True, description="False when the provider identifier is not recognised."
    )


class CodeRequest(_Frozen):
    provider: str
    api_key: str | None = None
    description: str
    language: str
    model: str | None = None


class CodeResponse(_Frozen):
    code: str
    language: str


class FileTypeStat(_Frozen):
    extension: str
    count: int


class FileInfo(_Frozen):
    path: str
    size: int


class ProjectAnalysis(_Frozen):
    """Result of scanning a project directory."""

    total_files: int
    total_directories: int
    file_types: list[FileTypeStat]
    largest_files: list[FileInfo]
    suggestions: list[str]
    summary: str


class FileNode(_Frozen):
    name: str
    path: str
    is_directory: bool
    children: list[FileNode] | None = None


class DirectoryListing(_Frozen):
    path: str
    files: list[FileNode]


class SystemInfo(_Frozen):
    platform: str
    arch: str
    version: str
