# =============================================================================
# main.py  —  Entry Point for the Handwriting OCR Transcription Assistant
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (API_TOKEN, OPENROUTER_API_KEY, ...)
#   2. Creates the Google ADK agent (agent/ocr_agent.py), which spawns the
#      MCP server (tools/mcp_server.py) over stdio
#   3. Reads requests like "transcribe ./notes/page1.jpg" from the terminal
#   4. Streams the agent's tool calls and prints its final answer
#
# To run only the MCP server (for Claude Desktop or any other MCP host),
# use the `handwriting-ocr-mcp` console script instead.
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm and the spawned server both
# read their keys from the environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.ocr_agent import create_agent

APP_NAME = "handwriting_ocr_assistant"
USER_ID = "local_user"


async def run_agent():
    """Run the transcription assistant interactively."""

    print("=" * 70)
    print("  HANDWRITING OCR TRANSCRIPTION ASSISTANT")
    print("  Google ADK + LiteLlm + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Give me a path to a handwritten document to transcribe.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is working...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if hasattr(part, "text") and part.text:
                        final_response = part.text

                    if hasattr(part, "function_call") and part.function_call:
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
