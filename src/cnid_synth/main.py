"""
cnid-synth command line entry point

Run with: cnid-synth --count 5 --area 武汉 --age 30
Or: python -m cnid_synth.main --count 5

Generated records are printed to stdout as a JSON array; logs go to stderr.
"""

import argparse
import json
import os
import sys
from typing import Optional

import yaml

from cnid_synth import __version__
from cnid_synth.config.settings import GeneratorConfig, load_config_from_yaml
from cnid_synth.core import id_card
from cnid_synth.core.errors import ValidationError
from cnid_synth.core.synthetic.generator import PersonGenerator, PersonInfo
from cnid_synth.logging.setup import LOG_FORMATS, LOG_LEVELS, get_logger, setup_logging

logger = get_logger(__name__)


def validate_environment() -> list[str]:
    """Validate CNID_SYNTH_* environment variables.

    Returns:
        List of validation error messages (empty if all valid).
    """
    errors = []

    log_level = os.getenv("CNID_SYNTH_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        errors.append(f"CNID_SYNTH_LOG_LEVEL must be one of {list(LOG_LEVELS)}, got: {log_level}")

    log_format = os.getenv("CNID_SYNTH_LOG_FORMAT", "json").lower()
    if log_format not in LOG_FORMATS:
        errors.append(f"CNID_SYNTH_LOG_FORMAT must be one of {list(LOG_FORMATS)}, got: {log_format}")

    fallback = os.getenv("CNID_SYNTH_FALLBACK_AREA_CODE")
    if fallback is not None and not (len(fallback) == 6 and fallback.isascii() and fallback.isdigit()):
        errors.append(f"CNID_SYNTH_FALLBACK_AREA_CODE must be 6 digits, got: {fallback}")

    dataset = os.getenv("CNID_SYNTH_DATASET")
    if dataset and not os.path.isfile(dataset):
        errors.append(f"CNID_SYNTH_DATASET file not found: {dataset}")

    return errors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cnid-synth",
        description="Generate synthetic Chinese identity records as JSON.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of records to generate (default: 1)",
    )
    parser.add_argument(
        "--area",
        help="Region name, e.g. 武汉 or 朝阳区 (requires --age)",
    )
    parser.add_argument(
        "--area-code",
        help="6-digit region code, e.g. 420102",
    )
    parser.add_argument(
        "--age",
        type=int,
        help="Age in years, 0-120",
    )
    parser.add_argument(
        "--birthday",
        help="Birth date as YYYYMMDD",
    )
    parser.add_argument(
        "--gender",
        type=int,
        choices=[id_card.FEMALE, id_card.MALE],
        help="0 for female, 1 for male (default: random)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible output",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML settings file",
    )
    return parser


def load_config(path: Optional[str]) -> GeneratorConfig:
    """Load settings from a YAML file, or from the environment when no file is given."""
    if path:
        return load_config_from_yaml(path)
    return GeneratorConfig.from_env()


def generate_records(generator: PersonGenerator, args: argparse.Namespace) -> list[PersonInfo]:
    """Generate records according to parsed command line arguments.

    Raises:
        ValidationError: If an argument value is invalid.
    """
    if args.area is not None:
        if args.age is None:
            raise ValidationError("--area requires --age", field="age")
        if args.count <= 0:
            raise ValidationError("生成数量必须是正整数", field="count")
        return [
            generator.generate_person_info_by_area_and_age(args.area, args.age, gender=args.gender)
            for _ in range(args.count)
        ]

    birthday = args.birthday
    if birthday is None and args.age is not None:
        birthday = id_card.birth_date_from_age(args.age, generator.rng)

    return generator.generate_batch(
        args.count,
        area_code=args.area_code,
        birthday=birthday,
        gender=args.gender,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Run the cnid-synth CLI.

    Returns:
        Process exit code: 0 on success, 1 on configuration errors,
        2 on invalid arguments.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    validation_errors = validate_environment()
    if validation_errors:
        print("Configuration errors detected:", file=sys.stderr)
        for error in validation_errors:
            print(f"  - {error}", file=sys.stderr)
        return 1

    setup_logging()

    try:
        config = load_config(args.config)
        generator = PersonGenerator(config, seed=args.seed)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("Failed to load configuration", extra={"event": "config_error", "error": str(e)})
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        records = generate_records(generator, args)
    except ValidationError as e:
        logger.error("Invalid arguments", extra={"field": e.field, "error": str(e)})
        print(f"Invalid argument: {e}", file=sys.stderr)
        return 2

    json.dump([record.to_dict() for record in records], sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
