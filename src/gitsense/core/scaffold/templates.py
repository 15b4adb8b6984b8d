from __future__ import annotations

"""
Stub Content Templates.

Closed catalogue of placeholder generators used when materializing a
scaffold. Each template declares the extensions it serves and a pure
render function taking (filename, base_name). Extensions missing from the
catalogue resolve to the generic template.
"""

import html
import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

from gitsense.domain.constants import GENERATOR_SIGNATURE

_IDENTIFIER_RX = re.compile(r"[^0-9A-Za-z_$]")

# -----------------------------------------------------------------------------
# TEMPLATE MODEL
# -----------------------------------------------------------------------------

class StubKind(str, Enum):
    COMPONENT = "component"
    MODULE = "module"
    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    SASS = "sass"
    JSON_DATA = "json"
    DOCUMENT = "document"
    MARKUP = "markup"
    ENVIRONMENT = "environment"
    IGNORE_FILE = "ignore"
    CONFIG = "config"
    XML = "xml"
    YAML = "yaml"
    GENERIC = "generic"


@dataclass(frozen=True)
class StubTemplate:
    """
    Placeholder generator bound to a set of file extensions.

    Attributes:
        kind: Catalogue identifier.
        extensions: Lower-case extensions (without dot) served by this template.
        render: Callable producing the stub from (filename, base_name).
    """
    kind: StubKind
    extensions: Tuple[str, ...]
    render: Callable[[str, str], str]

# -----------------------------------------------------------------------------
# RENDER FUNCTIONS
# -----------------------------------------------------------------------------

def component_identifier(base_name: str) -> str:
    """Derive a valid JavaScript identifier from a file base name."""
    ident = _IDENTIFIER_RX.sub("", base_name)
    if not ident or ident[0].isdigit():
        ident = f"Component{ident}"
    return ident


def _component(filename: str, base: str) -> str:
    ident = component_identifier(base)
    return (
        f"// {filename}\n"
        "import React from 'react';\n"
        "\n"
        f"const {ident} = () => {{\n"
        "  return (\n"
        "    <div>\n"
        f"      {{/* TODO: Implement {base} component */}}\n"
        "    </div>\n"
        "  );\n"
        "};\n"
        "\n"
        f"export default {ident};\n"
    )


def _module(filename: str, base: str) -> str:
    return f"// {filename}\n\n// TODO: Implement {base} functionality\nexport {{}};\n"


def _script(filename: str, base: str) -> str:
    return f"// {filename}\n\n// TODO: Implement {base} functionality\n"


def _stylesheet(filename: str, base: str) -> str:
    return f"/* {filename} */\n\n/* TODO: Add styles for {base} */\n"


def _sass(filename: str, base: str) -> str:
    return f"// {filename}\n\n// TODO: Add styles for {base}\n"


def _json_data(filename: str, base: str) -> str:
    payload = {
        "name": base,
        "description": GENERATOR_SIGNATURE,
        "todo": f"TODO: Replace placeholder values for {base}",
    }
    return json.dumps(payload, indent=2) + "\n"


def _document(filename: str, base: str) -> str:
    return f"# {base}\n\n> {GENERATOR_SIGNATURE}\n\nTODO: Add content for {base}\n"


def _markup(filename: str, base: str) -> str:
    title = html.escape(base)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{title}</title>\n"
        "</head>\n"
        "<body>\n"
        f"  <h1>{title}</h1>\n"
        "  <!-- TODO: Add content -->\n"
        "</body>\n"
        "</html>\n"
    )


def _environment(filename: str, base: str) -> str:
    return f"# {filename}\n# Environment variables\n\n# TODO: Add your environment variables here\n"


def _ignore_file(filename: str, base: str) -> str:
    return (
        f"# {filename}\n"
        "# Dependencies\n"
        "node_modules/\n"
        "\n"
        "# Build outputs\n"
        ".next/\n"
        "build/\n"
        "dist/\n"
        "\n"
        "# Environment files\n"
        ".env.local\n"
        ".env.*.local\n"
        "\n"
        "# Logs\n"
        "*.log\n"
        "\n"
        "# OS generated files\n"
        ".DS_Store\n"
        "Thumbs.db\n"
        "\n"
        "# TODO: Add project-specific ignore rules\n"
    )


def _config(filename: str, base: str) -> str:
    return f"# {filename}\n# Configuration file for {base}\n\n# TODO: Add configuration settings\n"


def _xml(filename: str, base: str) -> str:
    # "--" is not allowed inside XML comments
    label = html.escape(filename).replace("--", "- -")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<!-- {label} -->\n"
        "<root>\n"
        "  <!-- TODO: Add XML content -->\n"
        "</root>\n"
    )


def _yaml(filename: str, base: str) -> str:
    return f"# {filename}\n# YAML configuration\n\n# TODO: Add configuration\nname: {json.dumps(base)}\n"


def _generic(filename: str, base: str) -> str:
    return f"// {filename}\n\n// TODO: Implement {base}\n// {GENERATOR_SIGNATURE}\n"

# -----------------------------------------------------------------------------
# CATALOGUE
# -----------------------------------------------------------------------------

STUB_TEMPLATES: Tuple[StubTemplate, ...] = (
    StubTemplate(StubKind.COMPONENT, ("tsx", "jsx"), _component),
    StubTemplate(StubKind.MODULE, ("ts",), _module),
    StubTemplate(StubKind.SCRIPT, ("js",), _script),
    StubTemplate(StubKind.STYLESHEET, ("css",), _stylesheet),
    StubTemplate(StubKind.SASS, ("scss",), _sass),
    StubTemplate(StubKind.JSON_DATA, ("json",), _json_data),
    StubTemplate(StubKind.DOCUMENT, ("md",), _document),
    StubTemplate(StubKind.MARKUP, ("html",), _markup),
    StubTemplate(StubKind.ENVIRONMENT, ("env",), _environment),
    StubTemplate(StubKind.IGNORE_FILE, ("gitignore",), _ignore_file),
    StubTemplate(StubKind.CONFIG, ("toml",), _config),
    StubTemplate(StubKind.XML, ("xml",), _xml),
    StubTemplate(StubKind.YAML, ("yml", "yaml"), _yaml),
)

GENERIC_TEMPLATE = StubTemplate(StubKind.GENERIC, (), _generic)

_BY_EXTENSION: Dict[str, StubTemplate] = {
    ext: template for template in STUB_TEMPLATES for ext in template.extensions
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def split_filename(filename: str) -> Tuple[str, str]:
    """Return (base_name, lower-cased extension) of a file name."""
    if "." not in filename:
        return filename, ""
    base, ext = filename.rsplit(".", 1)
    return base, ext.lower()


def resolve_template(filename: str) -> StubTemplate:
    """Select the catalogue entry for a file, falling back to the generic stub."""
    _, ext = split_filename(filename)
    return _BY_EXTENSION.get(ext, GENERIC_TEMPLATE)


def render_stub(filename: str) -> str:
    """
    Produce the deterministic placeholder content for a file name.

    Args:
        filename: Bare file name (no directory part).

    Returns:
        str: Stub text naming the file and carrying a TODO marker.
    """
    base, _ = split_filename(filename)
    return resolve_template(filename).render(filename, base)
