#!/usr/bin/env python3
"""Validate city YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from taxzone import TaxZoneError, load_city, load_vehicles
from taxzone.config import Settings


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_city_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single city YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
        # Semantic checks the schema can't express (window order, duplicates)
        load_city(filepath)
        load_vehicles(filepath)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except TaxZoneError as e:
        errors.append(f"Data error: {e}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main():
    """Validate all city YAML files in the data directory."""
    schema = load_schema()
    cities_dir = Settings.from_env().data_dir

    if not cities_dir.exists():
        print(f"Error: cities directory not found: {cities_dir}")
        return 1

    yaml_files = list(cities_dir.glob("*.yaml")) + list(cities_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {cities_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_city_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
