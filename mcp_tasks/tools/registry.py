"""
Tool Registry - Manifest Loading and Function-Schema Translation

This module holds the immutable MCP manifest and translates its declarative
tool descriptors into the function-calling schema format the model endpoint
expects.

The model-calling protocol requires an object-typed parameter schema, so tools
whose input schema is absent, null or not an object are normalized to "no
required fields" instead of being rejected. They stay callable.

Pattern: Service Registry (tool inventory loaded once at startup)
Pattern: Pure translation functions over an immutable configuration object
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional

from mcp_tasks.core.exceptions import ManifestLoadError
from mcp_tasks.models.domain import Manifest, ToolDescriptor

logger = logging.getLogger(__name__)

EMPTY_OBJECT_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


# =============================================================================
# Translation Functions
# =============================================================================


def to_parameters(descriptor: ToolDescriptor) -> dict[str, Any]:
    """
    Return the function-calling parameter schema for one descriptor.

    Object-typed input schemas pass through unchanged; everything else
    (null, non-object, "null" type marker) becomes an empty object schema.
    """
    schema = descriptor.input_schema
    if schema is not None and schema.get("type") == "object":
        return schema
    return copy.deepcopy(EMPTY_OBJECT_SCHEMA)


def translate(manifest: Manifest) -> list[dict[str, Any]]:
    """
    Translate manifest descriptors into OpenAI function schemas.

    Args:
        manifest: The loaded manifest.

    Returns:
        One {"type": "function", "function": {...}} entry per tool, in
        manifest order.

    Example:
        >>> translate(manifest)[0]["function"]["name"]
        'create-task'
    """
    return [
        {
            "type": "function",
            "function": {
                "name": descriptor.name,
                "description": descriptor.description or "",
                "parameters": to_parameters(descriptor),
            },
        }
        for descriptor in manifest.tools
    ]


def lookup(manifest: Manifest, name: str) -> Optional[ToolDescriptor]:
    """Find a descriptor by tool name, or None if the manifest lacks it."""
    for descriptor in manifest.tools:
        if descriptor.name == name:
            return descriptor
    return None


def accepts_input(descriptor: Optional[ToolDescriptor]) -> bool:
    """
    Whether an external caller should POST a JSON body to this tool.

    Absent descriptors, null schemas and "null" type markers mean the tool is
    invoked without a body (GET). The in-process dispatch path ignores this:
    it always receives parsed arguments.
    """
    if descriptor is None or descriptor.input_schema is None:
        return False
    return descriptor.input_schema.get("type") != "null"


def load_manifest_document(path: str | Path) -> dict[str, Any]:
    """
    Read the raw manifest document from disk.

    Raises:
        ManifestLoadError: If the file is missing or not a JSON object.
    """
    manifest_path = Path(path)
    try:
        document = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestLoadError(
            f"Failed to load manifest {manifest_path}: {e}", path=str(manifest_path)
        ) from e

    if not isinstance(document, dict):
        raise ManifestLoadError(
            f"Failed to load manifest {manifest_path}: document is not a JSON object",
            path=str(manifest_path),
        )
    return document


# =============================================================================
# ToolRegistry Class
# =============================================================================


class ToolRegistry:
    """
    Immutable view over the loaded manifest.

    Keeps the raw document (served verbatim by GET /mcp/manifest) next to the
    validated Manifest used for translation and lookup.

    Attributes:
        _manifest: Validated, frozen Manifest.
        _document: Raw manifest document as read from disk.

    Example:
        >>> registry = ToolRegistry.from_file("mcp_tasks/manifest.json")
        >>> registry.names()
        ['create-task', 'list-tasks', 'mark-complete', 'update-task']
    """

    def __init__(
        self, manifest: Manifest, document: Optional[dict[str, Any]] = None
    ) -> None:
        self._manifest = manifest
        self._document = (
            copy.deepcopy(document)
            if document is not None
            else manifest.model_dump(by_alias=True, exclude_none=True)
        )

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ToolRegistry":
        """Build a registry from an already-parsed manifest document."""
        return cls(Manifest.model_validate(document), document)

    @classmethod
    def from_file(cls, path: str | Path) -> "ToolRegistry":
        """
        Load the manifest file once and build the registry.

        Raises:
            ManifestLoadError: If the file cannot be read or validated.
        """
        document = load_manifest_document(path)
        try:
            registry = cls.from_document(document)
        except ValueError as e:
            raise ManifestLoadError(
                f"Failed to load manifest {path}: {e}", path=str(path)
            ) from e

        logger.info(f"Loaded {len(registry.manifest.tools)} tool descriptors from {path}")
        return registry

    @property
    def manifest(self) -> Manifest:
        return self._manifest

    @property
    def document(self) -> dict[str, Any]:
        """A copy of the raw manifest document."""
        return copy.deepcopy(self._document)

    def names(self) -> list[str]:
        return [descriptor.name for descriptor in self._manifest.tools]

    def translate(self) -> list[dict[str, Any]]:
        return translate(self._manifest)

    def lookup(self, name: str) -> Optional[ToolDescriptor]:
        return lookup(self._manifest, name)

    def accepts_input(self, name: str) -> bool:
        return accepts_input(self.lookup(name))


def load_manifest(path: str | Path) -> Manifest:
    """Read and validate the manifest file at `path`."""
    return ToolRegistry.from_file(path).manifest
