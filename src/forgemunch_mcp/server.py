"""MCP server for forgemunch-mcp."""

import asyncio
import json
import os
from typing import Any

import structlog
from mcp.server import Server
from mcp.types import Tool, TextContent

from .logging import configure_logging
from .parser import SymbolKind
from .tools.index_folder import index_folder
from .tools.list_indexes import list_indexes
from .tools.get_file_outline import get_file_outline
from .tools.get_hover import get_hover
from .tools.find_definition import find_definition
from .tools.search_symbols import search_symbols
from .tools.analyze_source import analyze_source
from .tools.lookup_docs import lookup_docs
from .tools.ask_forge import ask_forge

logger = structlog.get_logger(__name__)

# Create server
server = Server("forgemunch-mcp")

_WORKSPACE = {
    "type": "string",
    "description": "Workspace identifier returned by index_folder (the folder name)"
}

_FILE_PATH = {
    "type": "string",
    "description": "Path to the file within the workspace (e.g., 'models/social.frg')"
}

_POSITION = {
    "line": {
        "type": "integer",
        "description": "Zero-based line number"
    },
    "character": {
        "type": "integer",
        "description": "Zero-based column"
    },
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="index_folder",
            description="Index a local folder of Forge (.frg) models. Parses every file, extracts sigs, fields, predicates, functions, parameters, bound variables, tests and examples, and saves them to local storage.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to local folder (absolute or relative, supports ~ for home directory)"
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="list_indexes",
            description="List all indexed workspaces.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_file_outline",
            description="Get the outline of a Forge file: sigs with their fields, predicates and functions with their parameters, with signatures and summaries.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspace": _WORKSPACE,
                    "file_path": _FILE_PATH
                },
                "required": ["workspace", "file_path"]
            }
        ),
        Tool(
            name="get_hover",
            description="Get hover information (kind, signature and doc comment) for the declaration at or referenced at a position.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspace": _WORKSPACE,
                    "file_path": _FILE_PATH,
                    **_POSITION
                },
                "required": ["workspace", "file_path", "line", "character"]
            }
        ),
        Tool(
            name="find_definition",
            description="Go to the declaration of the name at a position. Searches the current file first, then the rest of the workspace.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspace": _WORKSPACE,
                    "file_path": _FILE_PATH,
                    **_POSITION
                },
                "required": ["workspace", "file_path", "line", "character"]
            }
        ),
        Tool(
            name="search_symbols",
            description="Search for symbols matching a query across an indexed workspace. Returns matches with signatures and summaries.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspace": _WORKSPACE,
                    "query": {
                        "type": "string",
                        "description": "Search query (matches symbol names, signatures, summaries, doc comments)"
                    },
                    "kind": {
                        "type": "string",
                        "description": "Optional filter by symbol kind",
                        "enum": [kind.value for kind in SymbolKind]
                    },
                    "file_pattern": {
                        "type": "string",
                        "description": "Optional glob pattern to filter files (e.g., 'models/*.frg')"
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return",
                        "default": 10
                    }
                },
                "required": ["workspace", "query"]
            }
        ),
        Tool(
            name="analyze_source",
            description="Extract declarations from Forge source text passed directly, without indexing. Returns an empty list when the text does not parse.",
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "Forge model text"
                    },
                    "outline_only": {
                        "type": "boolean",
                        "description": "Only return sigs, fields, predicates and functions",
                        "default": False
                    }
                },
                "required": ["source"]
            }
        ),
        Tool(
            name="lookup_docs",
            description="Search the bundled Forge documentation by keyword.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Topic or question (e.g., 'pfunc multiplicity')"
                    },
                    "max_sections": {
                        "type": "integer",
                        "description": "Maximum number of sections to return",
                        "default": 3
                    }
                },
                "required": ["query"]
            }
        ),
        Tool(
            name="ask_forge",
            description="Ask the Forge Assistant a question about Forge syntax, semantics or a model (requires ANTHROPIC_API_KEY; otherwise returns the relevant documentation).",
            inputSchema={
                "type": "object",
                "properties": {
                    "question": {
                        "type": "string",
                        "description": "The question or code to explain"
                    },
                    "command": {
                        "type": "string",
                        "description": "'' for general help, 'docs' to answer from documentation, 'explain' to explain code",
                        "enum": ["", "docs", "explain"],
                        "default": ""
                    },
                    "history": {
                        "type": "array",
                        "description": "Earlier conversation turns",
                        "items": {
                            "type": "object",
                            "properties": {
                                "role": {"type": "string", "enum": ["user", "assistant"]},
                                "content": {"type": "string"}
                            }
                        }
                    },
                    "workspace": _WORKSPACE,
                    "file_path": _FILE_PATH
                },
                "required": ["question"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    storage_path = os.environ.get("FORGE_INDEX_PATH")

    try:
        if name == "index_folder":
            result = index_folder(
                path=arguments["path"],
                storage_path=storage_path
            )
        elif name == "list_indexes":
            result = list_indexes(storage_path=storage_path)
        elif name == "get_file_outline":
            result = get_file_outline(
                workspace=arguments["workspace"],
                file_path=arguments["file_path"],
                storage_path=storage_path
            )
        elif name == "get_hover":
            result = get_hover(
                workspace=arguments["workspace"],
                file_path=arguments["file_path"],
                line=arguments["line"],
                character=arguments["character"],
                storage_path=storage_path
            )
        elif name == "find_definition":
            result = find_definition(
                workspace=arguments["workspace"],
                file_path=arguments["file_path"],
                line=arguments["line"],
                character=arguments["character"],
                storage_path=storage_path
            )
        elif name == "search_symbols":
            result = search_symbols(
                workspace=arguments["workspace"],
                query=arguments["query"],
                kind=arguments.get("kind"),
                file_pattern=arguments.get("file_pattern"),
                max_results=arguments.get("max_results", 10),
                storage_path=storage_path
            )
        elif name == "analyze_source":
            result = analyze_source(
                source=arguments["source"],
                outline_only=arguments.get("outline_only", False)
            )
        elif name == "lookup_docs":
            result = lookup_docs(
                query=arguments["query"],
                max_sections=arguments.get("max_sections", 3)
            )
        elif name == "ask_forge":
            result = await asyncio.to_thread(
                ask_forge,
                question=arguments["question"],
                command=arguments.get("command", ""),
                history=arguments.get("history"),
                workspace=arguments.get("workspace"),
                file_path=arguments.get("file_path"),
                storage_path=storage_path
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("tool_failed", tool=name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    configure_logging()
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
