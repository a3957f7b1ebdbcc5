#!/usr/bin/env python3
"""Validate fleet data YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _stringify_timestamps(value):
    """YAML turns unquoted timestamps into datetimes; the schema expects strings."""
    if isinstance(value, dict):
        return {k: _stringify_timestamps(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_timestamps(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def validate_fleet_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single fleet data file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=_stringify_timestamps(data), schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main():
    """Validate the given fleet files, or every YAML file in data/."""
    schema = load_schema()

    if len(sys.argv) > 1:
        yaml_files = [Path(arg) for arg in sys.argv[1:]]
    else:
        data_dir = Path(__file__).parent / "data"
        if not data_dir.exists():
            print(f"Error: data directory not found: {data_dir}")
            return 1
        yaml_files = list(data_dir.glob("*.yaml")) + list(data_dir.glob("*.yml"))

    if not yaml_files:
        print("Warning: No YAML files found")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_fleet_file(filepath, schema)
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
