"""HTTP routes for the desktop shell command surface."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from ..models import (
    ChatRequest,
    ChatResponse,
    CodeRequest,
    CodeResponse,
    DirectoryListing,
    FileNode,
    ProjectAnalysis,
    SystemInfo,
)
from ..services import project_analyzer, workspace
from ..services.gateway import GatewayService
from ..settings import Settings
from .schemas import (
    ApiConnectionTest,
    CloneRepository,
    DirectoryPath,
    FileWrite,
    GithubToken,
    ProjectChat,
    ProjectPath,
    TerminalCommand,
)

logger = structlog.get_logger(__name__)
router = APIRouter()
commands = APIRouter(prefix="/commands")


def get_gateway(request: Request) -> GatewayService:
    gateway: GatewayService = request.app.state.gateway
    return gateway


def get_app_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


@router.get("/healthz")
async def health_check(request: Request) -> dict[str, object]:
    gateway = get_gateway(request)
    return {
        "status": "ok",
        "environment": get_app_settings(request).environment,
        "providers": gateway.providers.available_providers(),
    }


@commands.post("/chat_with_ai")
async def chat_with_ai(
    payload: ProjectChat,
    gateway: GatewayService = Depends(get_gateway),
) -> ChatResponse:
    logger.info(
        "command.chat_with_ai",
        provider=payload.provider,
        api_key_present=bool(payload.api_key),
        project_path=payload.project_path,
    )
    request = ChatRequest.model_validate(payload.model_dump(exclude={"project_path"}))
    if payload.project_path is not None:
        analysis = await run_in_threadpool(
            project_analyzer.analyze_project, payload.project_path
        )
        prompt = project_analyzer.build_project_prompt(request.prompt, analysis)
        request = request.model_copy(update={"prompt": prompt})
    return await gateway.chat(request)


@commands.post("/generate_code")
async def generate_code(
    payload: CodeRequest,
    gateway: GatewayService = Depends(get_gateway),
) -> CodeResponse:
    return await gateway.generate_code(payload)


@commands.post("/test_api_connection")
async def test_api_connection(
    payload: ApiConnectionTest,
    gateway: GatewayService = Depends(get_gateway),
) -> bool:
    return await gateway.test_connection(payload.provider, payload.api_key)


@commands.post("/analyze_project_structure")
def analyze_project_structure(payload: ProjectPath) -> ProjectAnalysis:
    logger.info("command.analyze_project_structure", path=payload.path)
    return project_analyzer.analyze_project(payload.path)


@commands.post("/connect_github")
def connect_github(payload: GithubToken) -> bool:
    return workspace.connect_github(payload.token)


@commands.post("/get_system_info")
def get_system_info() -> SystemInfo:
    return workspace.get_system_info()


@commands.post("/list_directory")
def list_directory(payload: ProjectPath) -> DirectoryListing:
    return workspace.list_directory(payload.path)


@commands.post("/expand_directory")
def expand_directory(payload: DirectoryPath) -> list[FileNode]:
    return workspace.expand_directory(payload.path)


@commands.post("/read_file_content")
def read_file_content(payload: DirectoryPath) -> str:
    return workspace.read_file_content(payload.path)


@commands.post("/write_file_content")
def write_file_content(payload: FileWrite) -> bool:
    workspace.write_file_content(payload.path, payload.content)
    return True


@commands.post("/run_terminal_command")
async def run_terminal_command(
    payload: TerminalCommand,
    settings: Settings = Depends(get_app_settings),
) -> str:
    return await workspace.run_terminal_command(payload.command, payload.cwd, settings)


@commands.post("/clone_repository")
async def clone_repository(
    payload: CloneRepository,
    settings: Settings = Depends(get_app_settings),
) -> str:
    return await workspace.clone_repository(payload.url, payload.destination, settings)


router.include_router(commands)
