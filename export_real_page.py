#!/usr/bin/env python3
"""Export a real Notion page to Markdown.

Requirements:
- Notion session cookies of a user who can read the page
- The id of a page in that workspace

Setup:
1. Log in to https://www.notion.so in a browser
2. Copy the `token_v2` and `file_token` cookie values
3. Add to .env:
       EXAMPLES_NOTION_TOKEN_V2=...
       EXAMPLES_NOTION_FILE_TOKEN=...
       EXAMPLES_NOTION_PAGE_ID=...
4. Optional: WRITE_TO_FILE=true and OUTPUT_BASE_PATH=./exports
5. Run this script
"""

import asyncio
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load .env file
env_path = Path(__file__).parent / '.env'
load_dotenv(dotenv_path=env_path)

from nexport_tools.adapters.notion_export import (
    NotionExportError,
    NotionExportGetResultTool,
)


def read_env() -> dict[str, str] | None:
    """Read required example settings from the environment."""
    required = [
        "EXAMPLES_NOTION_TOKEN_V2",
        "EXAMPLES_NOTION_FILE_TOKEN",
        "EXAMPLES_NOTION_PAGE_ID",
    ]
    values = {name: os.getenv(name, "") for name in required}
    missing = [name for name, value in values.items() if not value]

    if missing:
        for name in missing:
            print(f"❌ Error: {name} environment variable is required")
        return None

    print(f"✅ Page id: {values['EXAMPLES_NOTION_PAGE_ID']}")
    return values


def write_files(page_id: str, files: list[str]) -> None:
    """Save every exported Markdown file below OUTPUT_BASE_PATH."""
    base_dir = Path(os.getenv("OUTPUT_BASE_PATH", "."))
    if not base_dir.exists():
        base_dir.mkdir(parents=True)
        print(f"📁 Created directory: {base_dir}")

    for i, text in enumerate(files):
        output_path = base_dir / f"notion_export_{page_id}_{i}.md"
        output_path.write_text(text, encoding="utf-8")
        print(f"   Exported to {output_path}")


async def main():
    """Export the configured page."""
    print("="*60)
    print("📤 Notion Export - Real Workspace Test")
    print("="*60)

    env = read_env()
    if not env:
        sys.exit(1)

    page_id = env["EXAMPLES_NOTION_PAGE_ID"]
    tool = NotionExportGetResultTool(
        token_v2=env["EXAMPLES_NOTION_TOKEN_V2"],
        file_token=env["EXAMPLES_NOTION_FILE_TOKEN"],
    )

    try:
        result = await tool.execute(
            ctx={"actor": "example_user"},
            input_data={"id": page_id},
        )
    except NotionExportError as e:
        print(f"❌ Export failed: {e}")
        print(f"   Error type: {type(e).__name__}")
        sys.exit(1)
    finally:
        await tool.exporter.close()

    if not result["files"]:
        print("ℹ️  Export finished with no Markdown files. This is normal for some blocks.")
        return

    print(f"✅ Exported {result['file_count']} file(s). First 100 characters:")
    print(result["files"][0][:100] + "...")

    if os.getenv("WRITE_TO_FILE") == "true":
        write_files(page_id, result["files"])


if __name__ == "__main__":
    asyncio.run(main())
