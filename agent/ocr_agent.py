# =============================================================================
# agent/ocr_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the transcription assistant: a Google ADK agent whose LLM (via
#   LiteLlm) calls the Handwriting OCR MCP server's tools.
#
#   ┌────────────────────────────┐   stdio    ┌────────────────────────┐
#   │  ADK Agent (LiteLlm model) │ ─────────▶ │  tools/mcp_server.py   │
#   │  + transcription prompt    │            │  upload_document       │
#   └────────────────────────────┘            │  check_status          │
#                                             │  get_text              │
#                                             └───────────┬────────────┘
#                                                         │ HTTPS
#                                                         ▼
#                                             www.handwritingocr.com
#
# MODEL:
#   "openrouter/openai/gpt-4o" by default; set OCR_AGENT_MODEL to any
#   LiteLlm model string to switch.  LiteLlm reads the provider key
#   (e.g. OPENROUTER_API_KEY) from the environment.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_transcription_prompt
from core.config import LOG_LEVEL_ENV_VAR, TOKEN_ENV_VAR

DEFAULT_MODEL = "openrouter/openai/gpt-4o"
MODEL_ENV_VAR = "OCR_AGENT_MODEL"


def _server_env() -> dict[str, str]:
    """Environment for the spawned MCP server process."""
    env = {"PATH": os.environ.get("PATH", "")}
    for key in (TOKEN_ENV_VAR, LOG_LEVEL_ENV_VAR):
        value = os.environ.get(key)
        if value:
            env[key] = value
    return env


def create_mcp_toolset() -> MCPToolset:
    """Toolset that spawns the MCP server as a subprocess over stdio."""
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    return MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,                 # same interpreter/venv as this process
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
            env=_server_env(),
        ),
    )


def create_agent() -> Agent:
    """Create the transcription assistant agent.

    Returns:
        A configured Google ADK Agent connected to the Handwriting OCR tools.
    """
    model_name = os.environ.get(MODEL_ENV_VAR, DEFAULT_MODEL)

    agent = Agent(
        name="handwriting_ocr_assistant",
        model=LiteLlm(model=model_name),
        instruction=get_transcription_prompt(),
        tools=[create_mcp_toolset()],
    )

    return agent
