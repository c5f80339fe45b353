"""
Code Synthesizer.

Emits a React/TSX form component (react-hook-form + zod + shadcn/ui)
equivalent to the synthesized schema and defaults, then formats it.
"""

import json
import re
from typing import Any

from formgen.config import FormGenConfig, get_config
from formgen.models.field_definitions import FormDefinition, column_span
from formgen.synthesis.defaults import defaults_from_resolution
from formgen.synthesis.formatter import format_source
from formgen.synthesis.resolve import Resolution, ResolvedField, resolve_form
from formgen.synthesis.schema import zod_expression
from formgen.synthesis.templates import render
from formgen.variants.controls import BASE_IMPORTS, ComponentImport, number_or, otp_slot_groups
from formgen.variants.registry import VariantRegistry, default_registry
from formgen.variants.validators import js_literal

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_WORD = re.compile(r"[0-9A-Za-z]+")


def object_key(name: str) -> str:
    """Property key for an object literal, quoted when it is not an identifier."""
    return name if _JS_IDENTIFIER.match(name) else json.dumps(name, ensure_ascii=False)


def camel_identifier(name: str) -> str:
    """camelCase identifier derived from a field name ("first_name" -> "firstName")."""
    words = _WORD.findall(name)
    if not words:
        return "field"
    head = words[0][:1].lower() + words[0][1:]
    ident = head + "".join(word[:1].upper() + word[1:] for word in words[1:])
    return ident if not ident[0].isdigit() else "field" + ident


def size_label(size: int) -> str:
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if size >= factor and size % factor == 0:
            return f"{size // factor} {unit}"
    return f"{size} bytes"


class _Identifiers:
    """Hands out unique identifier stems for per-field declarations."""

    def __init__(self):
        self._taken: set[str] = set()

    def claim(self, name: str) -> str:
        stem = camel_identifier(name)
        candidate, counter = stem, 2
        while candidate in self._taken:
            candidate = f"{stem}{counter}"
            counter += 1
        self._taken.add(candidate)
        return candidate


class _Imports:
    """Import statements merged per module, in first-use order."""

    def __init__(self):
        self._modules: dict[str, dict[str, Any]] = {}

    def add(self, spec: ComponentImport) -> None:
        entry = self._modules.setdefault(spec.module, {"names": set(), "default": None})
        entry["names"].update(spec.names)
        if spec.default:
            entry["default"] = spec.default

    def lines(self) -> list[str]:
        # React hooks import goes first
        modules = sorted(self._modules, key=lambda module: module != "react")
        lines = []
        for module in modules:
            entry = self._modules[module]
            parts = []
            if entry["default"]:
                parts.append(entry["default"])
            if entry["names"]:
                parts.append("{ " + ", ".join(sorted(entry["names"])) + " }")
            lines.append(f"import {', '.join(parts)} from {json.dumps(module)}")
        return lines


def _field_context(resolved: ResolvedField, default: Any, hooks: dict, options_ident: str | None) -> dict:
    spec, ctx = resolved.spec, resolved.context
    length = spec.length or ctx.otp_length
    return {
        "f": spec,
        "name": spec.name,
        "options": resolved.options,
        "options_ident": options_ident,
        "hooks": hooks,
        "ctx": ctx,
        "default": default,
        "country": spec.default_country or ctx.default_phone_country,
        "from_date": spec.min if isinstance(spec.min, str) else ctx.earliest_date,
        "to_date": spec.max if isinstance(spec.max, str) else None,
        "slider": {
            "min": number_or(spec.min, ctx.slider_min),
            "max": number_or(spec.max, ctx.slider_max),
            "step": number_or(spec.step, ctx.slider_step),
        },
        "length": length,
        "otp_groups": otp_slot_groups(length),
        "max_size_label": size_label(ctx.file_max_size),
    }


def code_from_resolution(resolution: Resolution, config: FormGenConfig | None = None) -> str:
    config = config or get_config()
    defaults = defaults_from_resolution(resolution)
    identifiers = _Identifiers()
    imports = _Imports()
    for spec in BASE_IMPORTS:
        imports.add(spec)

    hook_lines: list[str] = []
    option_consts: list[dict[str, Any]] = []
    rendered: dict[str, str] = {}

    for resolved in resolution.ordered():
        control = resolved.rule.control
        for spec in control.imports:
            imports.add(spec)

        stem = identifiers.claim(resolved.name)
        hooks: dict[str, dict[str, str | None]] = {}
        for hook in control.hooks:
            ident = stem + hook.suffix
            if hook.kind == "ref":
                imports.add(ComponentImport("react", ("useRef",)))
                hook_lines.append(f"const {ident} = useRef<{hook.ts_type}>({hook.initial})")
                hooks[hook.suffix] = {"value": ident, "setter": None}
            else:
                imports.add(ComponentImport("react", ("useState",)))
                setter = "set" + ident[:1].upper() + ident[1:]
                hook_lines.append(f"const [{ident}, {setter}] = useState<{hook.ts_type}>({hook.initial})")
                hooks[hook.suffix] = {"value": ident, "setter": setter}

        options_ident = None
        if control.options_const:
            options_ident = stem + "Options"
            option_consts.append({"ident": options_ident, "options": resolved.options})

        rendered[resolved.name] = render(
            control.template,
            **_field_context(resolved, defaults[resolved.name], hooks, options_ident),
        )

    blocks = []
    for row in resolution.rows:
        if len(row) == 1:
            blocks.append(rendered[row[0].name])
        else:
            blocks.append(
                render(
                    "row",
                    children=[rendered[resolved.name] for resolved in row],
                    span=column_span(len(row)),
                )
            )

    source = render(
        "component",
        imports=imports.lines(),
        option_consts=option_consts,
        schema=[(object_key(r.name), zod_expression(r)) for r in resolution.ordered()],
        defaults=[(object_key(name), js_literal(value)) for name, value in defaults.items()],
        component=config.component_name,
        hooks=hook_lines,
        blocks=blocks,
    )
    return format_source(source, indent=config.indent_width)


def synthesize_code(
    form: FormDefinition,
    registry: VariantRegistry | None = None,
    config: FormGenConfig | None = None,
) -> str:
    """
    Emit the form component source for a form.

    Raises:
        FormattingError: If the emitted source is structurally malformed.
    """
    registry = registry or default_registry()
    return code_from_resolution(resolve_form(form, registry), config)
