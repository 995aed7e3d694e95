#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from folio_app.config.loader import ConfigLoader, build_config
from folio_app.config.validation import ConfigValidator, ValidationError
from folio_app.errors import ConfigurationError


def configured_instruments(loader: ConfigLoader) -> List[str]:
    """Instrument ids listed in instruments.yaml."""
    return [str(instrument_id) for instrument_id in loader.load_instruments()]


def validate_instrument_config(loader: ConfigLoader, instrument_id: str) -> List[ValidationError]:
    """Validate configuration for a specific instrument."""
    config = loader.merge_config(instrument_id)
    errors = ConfigValidator.validate_config(config)
    if not errors:
        build_config(config)
    return errors


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"Validating analytics configuration in {loader.config_dir}")

    all_valid = True

    try:
        instrument_ids = configured_instruments(loader)
    except ConfigurationError as e:
        print(f"Cannot load instruments.yaml: {e}")
        sys.exit(1)

    # Unknown instruments fall back to defaults
    for instrument_id in instrument_ids + ["UNKNOWN-INSTRUMENT"]:
        try:
            errors = validate_instrument_config(loader, instrument_id)
        except ConfigurationError as e:
            print(f"  {instrument_id}: cannot load configuration: {e}")
            all_valid = False
            continue

        if errors:
            print(f"  {instrument_id}: {len(errors)} validation errors")
            for error in errors:
                print(f"    - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"  {instrument_id}: ok")

    if all_valid:
        print("All configuration validation passed")
        sys.exit(0)
    else:
        print("Configuration validation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
