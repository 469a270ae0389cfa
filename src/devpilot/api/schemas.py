"""Request bodies for commands that do not take a whole model."""

from __future__ import annotations

from pydantic import BaseModel

from ..models import ChatRequest


class ApiConnectionTest(BaseModel):
    provider: str
    api_key: str | None = None


class ProjectPath(BaseModel):
    path: str | None = None


class GithubToken(BaseModel):
    token: str


class DirectoryPath(BaseModel):
    path: str


class FileWrite(BaseModel):
    path: str
    content: str


class TerminalCommand(BaseModel):
    command: str
    cwd: str | None = None


class CloneRepository(BaseModel):
    url: str
    destination: str | None = None


class ProjectChat(ChatRequest):
    """Chat request that may ground the prompt in a scanned project."""

    project_path: str | None = None
