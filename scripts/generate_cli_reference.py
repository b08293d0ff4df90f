#!/usr/bin/env python3
"""Generate CLI reference documentation from the etpayroll typer app."""

import inspect
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any

# Add parent directory to path to import etpayroll
sys.path.insert(0, str(Path(__file__).parent.parent))

from typer.models import ArgumentInfo, OptionInfo

from etpayroll.cli import app
from etpayroll.domain.payroll import RateConfig


def format_argument(param_name: str, param: inspect.Parameter) -> str:
    """Format a positional argument line."""
    info = param.default
    line = f"- `{param_name.upper()}` (required)"
    if isinstance(info, ArgumentInfo) and info.help:
        line += f": {info.help}"
    return line


def format_option(param_name: str, info: OptionInfo) -> str:
    """Format an option with its flags, help text, and default."""
    flags = list(info.param_decls) or [f"--{param_name.replace('_', '-')}"]
    line = "- " + ", ".join(f"`{flag}`" for flag in flags)

    if info.help:
        line += f": {info.help}"

    if info.default not in (None, False, "", ...):
        line += f" (default: {info.default})"

    return line


def generate_command_doc(command_name: str, command_obj: Any) -> str:
    """Generate documentation for a single command."""
    callback = command_obj.callback
    doc = (callback.__doc__ or "No description available.").strip()

    arguments: list[str] = []
    options: list[str] = []

    for param_name, param in inspect.signature(callback).parameters.items():
        if isinstance(param.default, OptionInfo):
            options.append(format_option(param_name, param.default))
        else:
            arguments.append(format_argument(param_name, param))

    usage = " ".join(["uv run etpayroll", command_name, *(f"[{a.split('`')[1]}]" for a in arguments)])
    lines = [f"### {command_name}", "", doc, "", "**Usage:**", "", "```bash", usage, "```", ""]

    if arguments:
        lines.extend(["**Arguments:**", "", *arguments, ""])

    if options:
        lines.extend(["**Options:**", "", *options, ""])

    return "\n".join(lines)


def generate_rates_table() -> list[str]:
    """Document the default rate configuration written by `etpayroll init`."""
    lines = ["## Default Rates", "", "| Key | Default |", "|-----|---------|"]
    defaults = RateConfig()
    for field in fields(RateConfig):
        lines.append(f"| `{field.name}` | {getattr(defaults, field.name)} |")
    lines.append("")
    return lines


def generate_cli_reference() -> str:
    """Generate complete CLI reference documentation."""
    lines = [
        "---",
        "tags: [reference]",
        "---",
        "",
        "# CLI Commands Reference",
        "",
        "Complete reference for all etpayroll CLI commands and options.",
        "",
        "## Usage",
        "",
        "```bash",
        "uv run etpayroll [COMMAND] [OPTIONS]",
        "```",
        "",
        *generate_rates_table(),
        "## Commands",
        "",
    ]

    commands = sorted(
        app.registered_commands,
        key=lambda x: x.name or (x.callback.__name__ if x.callback else ""),
    )
    for command_obj in commands:
        command_name = command_obj.name or (command_obj.callback.__name__ if command_obj.callback else "unknown")
        lines.append(generate_command_doc(command_name, command_obj))

    return "\n".join(lines)


def main() -> None:
    """Generate and write CLI reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "reference" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(generate_cli_reference(), encoding="utf-8")
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
