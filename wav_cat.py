#!/usr/bin/env python3
"""
wav_cat.py

WAV header inspector built on surf.get_info().

Modes:
- info: Decode one or more files and print format/channels/frequency/bit depth
- scan: Walk a directory tree, validate every WAV header and write a CSV report
- scan --survey: Count files per header status and write a survey CSV
- scan --errors-only: Keep only files whose header failed validation

Examples:
  python wav_cat.py info "D:\\Audio\\Loops\\SomeLoop.wav"
  python wav_cat.py scan "D:\\Audio\\Loops" -n 200
  python wav_cat.py scan "D:\\Audio\\Loops" --errors-only -o broken.csv
  python wav_cat.py -v scan "D:\\Audio\\Loops" --survey -n 1000
"""

import argparse
import logging
import os
import re
import sys

import pandas as pd

from surf import WavHeaderError, get_info

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["filename", "status", "format", "channels", "frequency", "bits_per_sample"]
HEADER_INT_COLUMNS = ["channels", "frequency", "bits_per_sample"]
STATUS_OK = "ok"


# --------------------------
# Loading / presentation
# --------------------------
def read_wav_bytes(filepath):
    with open(filepath, "rb") as f:
        return f.read()


def describe_info(info):
    return (
        f"format            {info.format.label}\n"
        f"channels          {info.channels}\n"
        f"frequency         {info.frequency} Hz\n"
        f"bits per sample   {info.bits_per_sample}\n"
    )


def error_message(error):
    if isinstance(error, WavHeaderError):
        return error.error.value
    if isinstance(error, OSError):
        return error.strerror or str(error)
    return str(error)


def describe_error(filepath, error):
    """One line naming the file and what went wrong with it."""
    return f"{filepath}: {error_message(error)}"


def inspect_file(filepath):
    """
    Load and decode a single file.

    Returns:
        (info, error) where exactly one is None. error is a WavHeaderError
        or the OSError raised while reading.
    """
    try:
        data = read_wav_bytes(filepath)
    except OSError as e:
        logger.debug("Could not read %s: %s", filepath, e)
        return None, e
    try:
        return get_info(data), None
    except WavHeaderError as e:
        logger.debug("%s failed header check %s", filepath, e.error.name)
        return None, e


def safe_basename_for_csv(path_basename):
    """
    Preserve directory portion; slugify only the basename.
    Ensures parent directories exist and .csv suffix is present.
    """
    path_norm = os.path.normpath(path_basename)
    dirpart, base = os.path.split(path_norm)
    base_slug = re.sub(r"[^A-Za-z0-9._-]+", "_", base.strip()) or "output.csv"
    if not base_slug.lower().endswith(".csv"):
        base_slug += ".csv"
    if dirpart:
        os.makedirs(dirpart, exist_ok=True)
        return os.path.join(dirpart, base_slug)
    return base_slug


# --------------------------
# Directory scan
# --------------------------
def iter_wav_files(directory):
    for root, _, files in os.walk(directory):
        for file in sorted(files):
            if file.lower().endswith(".wav"):
                yield os.path.join(root, file)


def scan_directory(directory, limit=500, errors_only=False, quiet=True):
    """
    Validate the header of up to `limit` WAV files under `directory`.

    Returns a DataFrame with REPORT_COLUMNS, one row per file. Files that
    fail keep empty header fields and carry the failure message as status.
    """
    rows = []
    scanned = 0

    for filepath in iter_wav_files(directory):
        if scanned >= limit:
            break
        scanned += 1

        info, error = inspect_file(filepath)
        if info is not None:
            if errors_only:
                continue
            row = {"filename": filepath, "status": STATUS_OK}
            row.update(info.as_row())
            if not quiet:
                print(f"[OK]  {os.path.basename(filepath)} : {info.format.label}, "
                      f"{info.channels} ch, {info.frequency} Hz, {info.bits_per_sample} bit")
        else:
            row = {"filename": filepath, "status": error_message(error)}
            if not quiet:
                print(f"[ERR] {describe_error(os.path.basename(filepath), error)}")
        rows.append(row)

    logger.debug("Scanned %d file(s) under %s", scanned, directory)
    df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    # nullable ints, failed rows stay blank
    df[HEADER_INT_COLUMNS] = df[HEADER_INT_COLUMNS].astype("Int64")
    return df


def survey(df):
    """Count files per status, most common first."""
    counts = df["status"].value_counts()
    return counts.rename_axis("status").reset_index(name="files")


def write_report(df, output_csv):
    df.to_csv(output_csv, index=False)
    return output_csv


# --------------------------
# Commands
# --------------------------
def run_info(args):
    exit_code = 0
    for filepath in args.files:
        info, error = inspect_file(filepath)
        if error is not None:
            print(describe_error(filepath, error), file=sys.stderr)
            exit_code = 1
            continue
        print(f"{os.path.basename(filepath)}\n")
        print(describe_info(info))
    return exit_code


def run_scan(args):
    if not os.path.isdir(args.directory):
        print(f"[ERR] Not a directory: {args.directory}", file=sys.stderr)
        return 1

    default_base = os.path.basename(os.path.normpath(args.directory))
    df = scan_directory(args.directory, limit=args.num, errors_only=args.errors_only, quiet=args.quiet)

    if args.survey:
        counts = survey(df)
        print("\n== Header Status Survey ==")
        for status, files in counts.itertuples(index=False):
            print(f"{status:28s} : {files} files")
        survey_csv = safe_basename_for_csv(args.output or (default_base + "_survey.csv"))
        write_report(counts, survey_csv)
        print(f"\n[INFO] Scanned {len(df)} file(s). Found {len(counts)} distinct status(es).")
        print(f"[INFO] Wrote survey to {survey_csv}")
        return 0

    output_csv = safe_basename_for_csv(args.output or (default_base + "_headers.csv"))
    write_report(df, output_csv)
    failed = int((df["status"] != STATUS_OK).sum())
    if failed and not args.quiet:
        print(f"\n[WARN] {failed} file(s) failed header validation.")
    print(f"\n[INFO] Wrote headers for {len(df)} entries to {output_csv}")
    return 0


# --------------------------
# Main
# --------------------------
def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="WAV header inspector (RIFF/WAVE fmt + data markers).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostic logging level (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print header info for WAV file(s).")
    info.add_argument("files", nargs="+", help="Path(s) to WAV file(s).")
    info.set_defaults(func=run_info)

    scan = sub.add_parser("scan", help="Validate every WAV header under a directory.")
    scan.add_argument("directory", help="Directory containing WAV files.")
    scan.add_argument("-o", "--output", help="Output CSV filename. Default: <dirname>_headers.csv")
    scan.add_argument("-n", "--num", type=int, default=500, help="Number of WAV files to scan.")
    scan.add_argument("-q", "--quiet", action="store_true", help="Suppress per-file console output.")
    scan.add_argument("--survey", action="store_true", help="Count files per header status.")
    scan.add_argument("--errors-only", action="store_true", help="Only report files that fail validation.")
    scan.set_defaults(func=run_scan)

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    level = "DEBUG" if args.verbose else args.log_level
    logging.basicConfig(level=getattr(logging, level))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
