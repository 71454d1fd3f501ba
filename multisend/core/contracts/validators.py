"""
JSON Schema Contract Validators

Validates raw JSON payloads against the formal contracts of the
settlement calculator. Uses the jsonschema library (Draft 2020-12).

Schemas (shipped in the schema/ directory next to this module):
- settlement_request.json (balances, definitions, multi_send)
- settlement.json (computed balance changes)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    JSON Schema file loader.

    Looks up schemas in the package's schema/ directory and caches them.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'settlement')

        Returns:
            Loaded schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class of contract validators.

    Wraps validation of payloads against one JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate a payload.

        Raises:
            jsonschema.ValidationError: If the payload violates the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Iterate over every validation error of a payload."""
        return self.validator.iter_errors(data)


class SettlementRequestValidator(ContractValidator):
    """Validator of the settlement_request contract."""

    def __init__(self):
        super().__init__("settlement_request")


class SettlementValidator(ContractValidator):
    """Validator of the settlement contract."""

    def __init__(self):
        super().__init__("settlement")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_settlement_request(data: Dict[str, Any]) -> None:
    """
    Validate a settlement_request payload.

    Raises:
        jsonschema.ValidationError: If the payload violates the schema
    """
    SettlementRequestValidator().validate(data)


def validate_settlement(data: Dict[str, Any]) -> None:
    """
    Validate a settlement payload.

    Raises:
        jsonschema.ValidationError: If the payload violates the schema
    """
    SettlementValidator().validate(data)
