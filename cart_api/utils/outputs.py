"""
Stack output helpers.

Writes resolved Pulumi outputs to a local env file so tooling (producers,
smoke tests) can find the endpoint without querying the stack.
"""

from pathlib import Path
from typing import Any, Mapping

import pulumi


def format_env_lines(values: Mapping[str, Any]) -> list[str]:
    """
    Render resolved output values as KEY=value lines.

    Keys are upper-cased; None values are skipped.
    """
    lines = []
    for key, value in values.items():
        if value is None:
            continue
        lines.append(f"{key.upper()}={value}")
    return lines


def _write_env_file(values: dict[str, Any], path: Path) -> str:
    lines = format_env_lines(values)
    path.write_text("\n".join(lines) + "\n")
    pulumi.log.info(f"Wrote {len(lines)} stack outputs to {path}")
    return str(path)


def write_outputs_to_env(
    outputs: Mapping[str, pulumi.Input[Any]],
    filename: str,
) -> pulumi.Output[str] | None:
    """
    Write stack outputs to an env file once they resolve.

    Args:
        outputs: Mapping of export name to (possibly unresolved) value
        filename: Target file, relative to the working directory

    Returns:
        Output resolving to the written path, or None during preview
    """
    if pulumi.runtime.is_dry_run():
        pulumi.log.info(f"Preview: skipping write of {filename}")
        return None

    path = Path(filename)
    return pulumi.Output.all(**outputs).apply(
        lambda values: _write_env_file(values, path)
    )
