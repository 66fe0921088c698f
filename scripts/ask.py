"""Ask the résumé chatbot a question from the command line."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from resume_rag.config.settings import Settings
from resume_rag.observability.logger import setup_logging
from resume_rag.pipeline.builder import create_session


async def main(question: str, stream: bool) -> None:
    settings = Settings()
    setup_logging("WARNING")
    session = await create_session(settings)

    if not stream:
        print(await session.ask(question))
        return

    async for fragment in session.ask_stream(question):
        print(fragment, end="", flush=True)
    print()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("question")
    parser.add_argument("--stream", action="store_true", help="print fragments as they arrive")
    args = parser.parse_args()
    asyncio.run(main(args.question, args.stream))
