"""
MCP Tool definitions for formgen.

Each tool takes a form definition (editor JSON) and returns a JSON-able
dictionary. Failures are reported in the result, never raised.
"""

import logging
from typing import Any, Callable

from pydantic_core import to_jsonable_python

from formgen.compiler import FormCompiler
from formgen.exceptions import FormGenError
from formgen.variants.registry import default_registry

logger = logging.getLogger("formgen-mcp")


def _error(message: str) -> dict[str, Any]:
    return {"error": True, "message": message}


def mcp_list_field_variants() -> dict[str, Any]:
    """Catalog of every registered field variant."""
    return {"variants": default_registry().describe()}


def mcp_synthesize_schema(form_definition: Any) -> dict[str, Any]:
    """
    Build the validation schema of a form.

    Returns:
        {"schema": <JSON Schema>, "uiSchema": {...}, "zod": {name: expression}}
    """
    schema = FormCompiler().synthesize_schema(form_definition)
    return {
        "schema": schema.to_json_schema(),
        "uiSchema": schema.to_ui_schema(),
        "zod": {entry.name: entry.zod for entry in schema.entries},
        "warnings": [str(w) for w in schema.warnings],
    }


def mcp_synthesize_defaults(form_definition: Any) -> dict[str, Any]:
    """Build the default values of a form."""
    defaults = FormCompiler().synthesize_defaults(form_definition)
    return {"defaultValues": to_jsonable_python(defaults)}


def mcp_synthesize_code(form_definition: Any) -> dict[str, Any]:
    """Emit the form component source."""
    return {"code": FormCompiler().synthesize_code(form_definition)}


def mcp_compile_form(form_definition: Any) -> dict[str, Any]:
    """Compile a form into schema, defaults and code in one call."""
    return FormCompiler().compile(form_definition).to_form_config()


def mcp_validate_form_data(form_definition: Any, data: dict[str, Any]) -> dict[str, Any]:
    """Validate submitted values against the schema of a form."""
    if not isinstance(data, dict):
        return _error("'data' must be an object")
    schema = FormCompiler().synthesize_schema(form_definition)
    return schema.validate(data).model_dump(mode="json")


_HANDLERS: dict[str, Callable[..., dict[str, Any]]] = {
    "list_field_variants": mcp_list_field_variants,
    "synthesize_schema": mcp_synthesize_schema,
    "synthesize_defaults": mcp_synthesize_defaults,
    "synthesize_code": mcp_synthesize_code,
    "compile_form": mcp_compile_form,
    "validate_form_data": mcp_validate_form_data,
}


def call_mcp_tool(name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """
    Run a tool by name.

    Form definition and formatting errors come back as
    {"error": true, "message": ...}.
    """
    handler = _HANDLERS.get(name)
    if handler is None:
        return _error(f"Unknown tool: {name}")

    arguments = dict(arguments or {})
    if name != "list_field_variants" and "form_definition" not in arguments:
        return _error("Missing required argument 'form_definition'")
    if name == "validate_form_data" and "data" not in arguments:
        return _error("Missing required argument 'data'")

    try:
        return handler(**arguments)
    except FormGenError as e:
        logger.error(f"Error in {name}: {e}")
        return _error(str(e))
    except TypeError as e:
        logger.error(f"Bad arguments for {name}: {e}")
        return _error(f"Invalid arguments: {e}")


_FORM_DEFINITION_PROPERTY = {
    "description": (
        "Form definition: a list of fields, where a nested list is a row of "
        "fields sharing one line, or an object with a 'fields' list. Each "
        "field has 'variant' (or an editor 'type') and 'name'."
    ),
    "anyOf": [{"type": "array"}, {"type": "object"}, {"type": "string"}],
}


def _form_tool(name: str, description: str) -> dict:
    return {
        "name": name,
        "description": description,
        "inputSchema": {
            "type": "object",
            "properties": {"form_definition": _FORM_DEFINITION_PROPERTY},
            "required": ["form_definition"],
        },
    }


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "list_field_variants",
            "description": """
List the field variants a form definition may use.

Each entry has the variant name, the kind of value it produces, the
component it renders as, whether it takes options, and an example field.
""".strip(),
            "inputSchema": {"type": "object", "properties": {}},
        },
        _form_tool(
            "synthesize_schema",
            "Build the validation schema (JSON Schema, UI Schema and zod expressions) of a form.",
        ),
        _form_tool(
            "synthesize_defaults",
            "Build the default values of a form, one entry per field.",
        ),
        _form_tool(
            "synthesize_code",
            "Emit the formatted React form component source for a form.",
        ),
        _form_tool(
            "compile_form",
            """
Compile a form definition into its validation schema, default values and
component source in one call. Also returns warnings about unknown
variants, duplicate names and choice fields without options.
""".strip(),
        ),
        {
            "name": "validate_form_data",
            "description": "Validate submitted values against the schema of a form.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "form_definition": _FORM_DEFINITION_PROPERTY,
                    "data": {
                        "type": "object",
                        "description": "Submitted values keyed by field name",
                    },
                },
                "required": ["form_definition", "data"],
            },
        },
    ]
