"""Form registry for loading and caching form definitions."""

import json
import logging
from pathlib import Path

import jsonschema

from formwork.definition.loader import load, read_document
from formwork.definition.models import FormDefinition
from formwork.errors import ConfigurationError, FormNotFoundError
from formwork.translation import Translator

logger = logging.getLogger(__name__)

SUFFIXES = (".json", ".yaml", ".yml")


class FormRegistry:
    """Registry for loading and caching form definitions.

    Loads definitions from a directory structure:
        <registry_path>/forms/<form_id>/<version>.json

    Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
    YAML documents (``.yaml``/``.yml``) are accepted alongside JSON.
    """

    def __init__(
        self,
        registry_path: Path | str,
        schema_path: Path | str | None = None,
        translate: Translator | None = None,
    ) -> None:
        """Initialize the form registry.

        Args:
            registry_path: Path to the form registry directory.
            schema_path: Optional path to the form definition JSON schema.
            translate: Optional translator applied while loading definitions.
        """
        self.registry_path = Path(registry_path)
        self.forms_path = self.registry_path / "forms"
        self.translate = translate
        self._cache: dict[tuple[str, str], FormDefinition] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path) as f:
                self._schema = json.load(f)

    def _version_to_stem(self, version: str) -> str:
        """Convert version string to file stem (1.0.0 -> 1-0-0)."""
        return version.replace(".", "-")

    def _get_definition_path(self, form_id: str, version: str) -> Path | None:
        """Get the path to a definition file, whichever suffix exists."""
        stem = self._version_to_stem(version)
        for suffix in SUFFIXES:
            path = self.forms_path / form_id / f"{stem}{suffix}"
            if path.exists():
                return path
        return None

    def get(self, form_id: str, version: str) -> FormDefinition:
        """Get a form definition by ID and version.

        Args:
            form_id: The form identifier (e.g., 'login').
            version: The version string (e.g., '1.0.0').

        Returns:
            The loaded FormDefinition.

        Raises:
            FormNotFoundError: If the definition file doesn't exist.
            ConfigurationError: If the definition fails schema validation
                or cannot be loaded.
        """
        cache_key = (form_id, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        path = self._get_definition_path(form_id, version)
        if path is None:
            raise FormNotFoundError(
                f"Form definition not found: {form_id}@{version} "
                f"(expected under {self.forms_path / form_id})"
            )

        data = read_document(path)

        if self._schema:
            try:
                jsonschema.validate(data, self._schema)
            except jsonschema.ValidationError as e:
                raise ConfigurationError(
                    f"Form definition validation failed for {form_id}@{version}: {e.message}"
                ) from e

        definition = load(data, translate=self.translate)
        logger.debug("Loaded form definition %s@%s from %s", form_id, version, path)
        self._cache[cache_key] = definition
        return definition

    def list_forms(self) -> list[str]:
        """List all available form IDs."""
        if not self.forms_path.exists():
            return []
        return sorted(d.name for d in self.forms_path.iterdir() if d.is_dir())

    def list_versions(self, form_id: str) -> list[str]:
        """List all available versions for a form."""
        form_path = self.forms_path / form_id
        if not form_path.exists():
            return []
        versions = {
            f.stem.replace("-", ".")
            for f in form_path.iterdir()
            if f.suffix in SUFFIXES
        }
        return sorted(versions, key=_version_key)

    def get_latest(self, form_id: str) -> FormDefinition:
        """Get the latest version of a form.

        Raises:
            FormNotFoundError: If no versions exist.
        """
        versions = self.list_versions(form_id)
        if not versions:
            raise FormNotFoundError(f"No versions found for form: {form_id}")
        return self.get(form_id, versions[-1])


def _version_key(version: str) -> tuple:
    # Numeric parts compare numerically (1.10.0 > 1.9.0)
    return tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in version.split("."))
