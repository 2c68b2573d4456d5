# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#

import hashlib
import json
import logging
import os
from typing import Any, Dict, Optional, Set

import jsonschema

vollog = logging.getLogger(__name__)

cached_validations: Set[str] = set()


def load_schema(format: str) -> Optional[Dict[str, Any]]:
    """Loads the schema for a particular format, if one exists."""
    basepath = os.path.abspath(os.path.dirname(__file__))
    schema_path = os.path.join(basepath, "schema-" + format + ".json")
    if not os.path.exists(schema_path):
        vollog.debug(f"Schema for format not found: {schema_path}")
        return None
    with open(schema_path, "r") as s:
        return json.load(s)


def validate(input: Dict[str, Any], use_cache: bool = True) -> bool:
    """Validates an input JSON object based upon the format named in its
    metadata."""
    format = input.get("metadata", {}).get("format", None)
    if not format:
        vollog.debug("No schema format defined")
        return False
    schema = load_schema(format)
    if schema is None:
        return False
    return valid(input, schema, use_cache)


def create_json_hash(input: Dict[str, Any], schema: Dict[str, Any]) -> str:
    """Constructs the hash of the input and schema to create a unique
    identifier for a particular JSON object."""
    return hashlib.sha1(
        bytes(json.dumps((input, schema), sort_keys=True), "utf-8")
    ).hexdigest()


def valid(
    input: Dict[str, Any], schema: Dict[str, Any], use_cache: bool = True
) -> bool:
    """Validates a json schema.

    Raises:
        jsonschema.ValidationError: if the input does not match the schema
    """
    input_hash = create_json_hash(input, schema)
    if input_hash in cached_validations and use_cache:
        return True

    try:
        vollog.debug("Validating JSON against schema...")
        jsonschema.validate(input, schema)
        cached_validations.add(input_hash)
        vollog.debug("JSON validated against schema (result cached)")
    except jsonschema.exceptions.SchemaError:
        vollog.debug("Schema validation error", exc_info=True)
        return False

    return True
