"""Stream a reply into a terminal a couple of characters at a time."""

import asyncio

from goteo import DocumentStream, StreamConfig, StreamingEngine, render

REPLY = (
    "Sure! Here is a short example:\n\n"
    "```javascript\n"
    "function greeting(name) {\n"
    "  return `Hello, ${name}!`;\n"
    "}\n"
    "```\n\n"
    "It shows a **simple** greeting function."
)


async def main() -> None:
    done = asyncio.Event()

    def show(doc, is_done):
        print("\033[2J\033[H" + render(doc), flush=True)
        if is_done:
            done.set()

    with StreamingEngine(StreamConfig(chunk_size=2, interval_ms=30)) as engine:
        engine.start(REPLY, "msg-1-ai", DocumentStream(show))
        await done.wait()


asyncio.run(main())
