import json

import structlog
import yaml

from .core.errors import StateExportError
from .core.machine_state import MachineState

logger = structlog.get_logger(__name__)

EXPORT_FORMATS = ("json", "yaml")


def export_to_json(data: dict, filename: str) -> None:
    """Export data to a JSON file"""
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_yaml(data: dict, filename: str) -> None:
    """Export data to a YAML file"""
    with open(filename, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False)


def export_state(state: MachineState, filename: str, fmt: str = "json") -> str:
    """
    Write the final machine state to a file.

    Args:
        state: State returned by a finished run
        filename: Destination path
        fmt: Either 'json' or 'yaml'

    Returns:
        The path written to

    Raises:
        ValueError: If the format is not supported
        StateExportError: If the file cannot be written
    """
    if fmt == "json":
        writer = export_to_json
    elif fmt == "yaml":
        writer = export_to_yaml
    else:
        raise ValueError(f"Unsupported export format: {fmt}")

    try:
        writer(state.to_dict(), filename)
    except OSError as e:
        raise StateExportError(str(filename), e.strerror or str(e)) from e

    logger.info("Machine state exported", path=str(filename), format=fmt)
    return filename
