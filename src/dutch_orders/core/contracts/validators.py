"""
JSON Schema contract for the canonical order JSON.

The schema ships in schema/dutch_order.json next to this module and is
checked against the 2020-12 meta-schema when first loaded.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

SCHEMA_DIR = Path(__file__).parent / "schema"


class SchemaLoader:
    """Reads and caches the package's JSON Schema files."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: File name without the .json extension

        Raises:
            FileNotFoundError: No such schema file
            ValueError: File is not a valid 2020-12 JSON Schema
        """
        if schema_name not in self._schemas:
            schema_path = self._schema_dir / f"{schema_name}.json"
            if not schema_path.exists():
                raise FileNotFoundError(f"Schema not found: {schema_path}")

            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e}") from e
            self._schemas[schema_name] = schema

        return self._schemas[schema_name]


_SCHEMA_LOADER = SchemaLoader()


class DutchOrderValidator:
    """Checks canonical order JSON against dutch_order.json."""

    schema_name = "dutch_order"

    def __init__(self, loader: SchemaLoader = _SCHEMA_LOADER):
        self.schema = loader.load_schema(self.schema_name)
        self._validator = Draft202012Validator(self.schema)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(data)

    def first_error(self, data: Dict[str, Any]) -> Optional[jsonschema.ValidationError]:
        """Most relevant violation (jsonschema's best_match), or None if data conforms"""
        return best_match(self.iter_errors(data))
