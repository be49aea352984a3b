"""
CLI wrapper for calculate_bazi().

Usage:
    python -m sizhu.run --birth-date YYYY-MM-DD --birth-time HH:MM [--gender GENDER]
"""

import argparse
import json
import sys

from sizhu.bazi import calculate_bazi
from sizhu.errors import BaziError
from sizhu.settings import configure_logging, default_gender


def build_parser():
    parser = argparse.ArgumentParser(description="Compute the Four Pillars for a birth date and time.")
    parser.add_argument("--birth-date", required=True, dest="birth_date", help="YYYY-MM-DD")
    parser.add_argument("--birth-time", required=True, dest="birth_time", help="HH:MM or HH")
    parser.add_argument("--gender", default=None,
                        help="Opaque tag echoed in the output (default: $SIZHU_DEFAULT_GENDER or male)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        record = calculate_bazi(args.birth_date, args.birth_time, args.gender or default_gender())
    except BaziError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
