from core.config import get_config
from core.logging_config import setup_logging
from core.client import build_client
from core.models import ToolResult
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent, ToolAnnotations
from pydantic import Field, WrapValidator
from pathlib import Path
from importlib import import_module
import pkgutil
import inspect
import json
import sys
from typing import Annotated, Any

config = get_config()

# Set up logging using core.logging_config
logger = setup_logging(logs_dir=config.get("logs_dir"), level=config.get("log_level", "INFO"))

logger.info("MCP server bootstrap starting.")

try:
    mcp = FastMCP("github-projects")
    logger.info("MCP server instance created.")
except Exception:
    logger.exception("Failed to create FastMCP instance")
    raise

###################################################### MCP Tools ######################################################

logger.info("\n\n~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~\n")
logger.info("Loading MCP tools...")


def _maybe_parse(obj):
    """Clients sometimes send object/array arguments as JSON text."""
    if isinstance(obj, str):
        try:
            return json.loads(obj)
        except ValueError:
            return obj
    return obj


def _raw_json(value, handler):
    """Hand the decoded JSON value to the tool's own extractors untouched."""
    return value


def build_signature(params: dict[str, dict[str, Any]]) -> inspect.Signature:
    """Build the keyword-only signature FastMCP derives the tool's input schema from.

    Every parameter defaults to None so missing arguments reach the tool's
    extractors, which report them; `advertise_required` restores the schema's
    required list. String parameters are annotated `str` so FastMCP does not
    JSON-decode them (an owner named "null" stays a string); `_raw_json` skips
    pydantic coercion so type errors come from the extractors too.
    """
    parameters = []
    for name, meta in params.items():
        schema_extra = {"type": meta["type"]}
        for key in ("enum", "items"):
            if key in meta:
                schema_extra[key] = meta[key]
        python_type = str if meta["type"] == "string" else Any
        annotation = Annotated[
            python_type,
            WrapValidator(_raw_json),
            Field(description=meta.get("description"), json_schema_extra=schema_extra),
        ]
        parameters.append(inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY, default=None, annotation=annotation))
    return inspect.Signature(parameters=parameters)


def advertise_required(tool_name: str, params: dict[str, dict[str, Any]]) -> None:
    required = [name for name, meta in params.items() if meta.get("required")]
    if required:
        mcp._tool_manager.get_tool(tool_name).parameters["required"] = required


def make_wrapper(_func, params: dict[str, dict[str, Any]]):
    """Adapt a `(arguments, client)` tool coroutine to FastMCP's keyword-argument calling convention."""
    structured = {name for name, meta in params.items() if meta["type"] in ("object", "array")}

    async def _wrapped(**call_kwargs):
        arguments = {}
        for name, value in call_kwargs.items():
            if value is None:
                continue
            arguments[name] = _maybe_parse(value) if name in structured else value

        # one client per call; closing it releases its connection pool
        async with build_client() as client:
            result: ToolResult = await _func(arguments, client)
        if result.is_error:
            # returned rather than raised so the caller sees the text unprefixed
            return CallToolResult(isError=True, content=[TextContent(type="text", text=result.text)])
        return result.text

    _wrapped.__name__ = getattr(_func, "__name__", "tool")
    _wrapped.__doc__ = getattr(_func, "__doc__", None)
    _wrapped.__signature__ = build_signature(params)
    return _wrapped


TOOLS_PACKAGE = "tools"
tools_path = Path(__file__).resolve().parent / TOOLS_PACKAGE
loaded_tool_count = 0
registered_tool_names: list[str] = []
if tools_path.is_dir():
    for finder, name, ispkg in pkgutil.iter_modules([str(tools_path)]):
        if name.startswith("_"):
            continue
        module_name = f"{TOOLS_PACKAGE}.{name}"
        try:
            mod = import_module(module_name)
            logger.info(f"Imported tools module: {module_name}")
            if not hasattr(mod, "get_tools"):
                continue
            # mapping: tool_name -> { 'func', 'title', 'description', 'params', 'read_only' }
            for tool_name, meta in mod.get_tools().items():
                func = meta.get("func")
                if not func:
                    logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                    continue

                wrapper = make_wrapper(func, meta.get("params", {}))
                annotations = ToolAnnotations(
                    title=meta.get("title"),
                    readOnlyHint=meta.get("read_only", False),
                )
                try:
                    mcp.add_tool(
                        wrapper,
                        name=tool_name,
                        title=meta.get("title"),
                        description=meta.get("description"),
                        annotations=annotations,
                    )
                    advertise_required(tool_name, meta.get("params", {}))
                    logger.info(f"Added tool via add_tool: {tool_name} (title={meta.get('title')}) from {module_name}")
                    loaded_tool_count += 1
                    registered_tool_names.append(tool_name)
                except Exception:
                    logger.exception(f"Failed to register tool {tool_name} from {module_name}")
        except Exception:
            logger.exception(f"Failed to load tools from module {module_name}")
    logger.info(f"Total tools registered: {loaded_tool_count} , tool names: {registered_tool_names}")

###################################################### Startup ######################################################


def main():
    logger.info("Starting MCP server...")
    try:
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/server.log for details.", file=sys.stderr)
        sys.exit(-1)


if __name__ == "__main__":
    main()
