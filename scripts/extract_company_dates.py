"""
Slim a full company-registry dump down to name + registration date.

Usage:
    python scripts/extract_company_dates.py
    python scripts/extract_company_dates.py --input public/registered_companies.csv \
        --output public/company_dates.csv

The registry dump is large, so it is streamed in chunks. Rows missing either
the name or the date are dropped.
"""
import argparse
import sys
from pathlib import Path

import pandas as pd
from loguru import logger

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import config

OUTPUT_HEADERS = ["COMPANY_NAME", "DATE_OF_REGISTRATION"]


def find_columns(headers: list) -> tuple[str, str]:
    """Headers containing COMPANY_NAME and DATE_OF_REGISTRATION."""
    company = next((h for h in headers if "COMPANY_NAME" in h), None)
    date = next((h for h in headers if "DATE_OF_REGISTRATION" in h), None)
    if company is None or date is None:
        raise ValueError(f"COMPANY_NAME / DATE_OF_REGISTRATION not found in {headers}")
    return company, date


def extract(input_path: Path, output_path: Path, chunksize: int = 100_000) -> int:
    headers = list(pd.read_csv(input_path, nrows=0).columns)
    company_col, date_col = find_columns(headers)
    logger.info(f"Found columns: COMPANY_NAME at {headers.index(company_col)}, "
                f"DATE_OF_REGISTRATION at {headers.index(date_col)}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    first = True
    for chunk in pd.read_csv(input_path, usecols=[company_col, date_col], dtype=str,
                             keep_default_na=False, chunksize=chunksize):
        chunk = chunk.apply(lambda col: col.str.strip())
        chunk = chunk[(chunk[company_col] != "") & (chunk[date_col] != "")]
        chunk.columns = OUTPUT_HEADERS
        chunk.to_csv(output_path, mode="w" if first else "a", header=first, index=False)
        first = False
        count += len(chunk)
        logger.info(f"Processed {count} records...")

    if first:
        pd.DataFrame(columns=OUTPUT_HEADERS).to_csv(output_path, index=False)
    logger.info(f"Done! Created {output_path} with {count} records")
    return count


def main():
    parser = argparse.ArgumentParser(description="Extract company names and registration dates")
    parser.add_argument("--input", type=Path, default=Path(config.REGISTRY_PATH))
    parser.add_argument("--output", type=Path, default=Path("public/company_dates.csv"))
    parser.add_argument("--chunksize", type=int, default=100_000)
    args = parser.parse_args()

    extract(args.input, args.output, args.chunksize)


if __name__ == "__main__":
    main()
