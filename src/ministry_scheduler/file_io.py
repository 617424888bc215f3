import csv
import logging
import re
from pathlib import Path


def _normalize_text(s):
    # Replace smart quotes (\u2018, \u2019, \u201c, \u201d) with ASCII quotes
    s = (
        s.replace("\u2019", "'")
        .replace("\u2018", "'")
        .replace("\u201c", '"')
        .replace("\u201d", '"')
    )
    # Normalize runs of whitespace to a single space
    return re.sub(r"\s+", " ", s)


def load_csv(filename) -> list[dict]:
    """
    Load an exported sheet as dicts keyed by its header row.

    Headers and cells are trimmed and normalized. Rows with no text are
    dropped, as are cells under a blank header.
    """
    grid = load_grid(filename)
    if not grid:
        return []

    header = [title.strip() for title in grid[0]]
    records = []
    for row in grid[1:]:
        if not any(cell.strip() for cell in row):
            continue
        cells = row + [""] * (len(header) - len(row))
        records.append(
            {title: _normalize_text(cell.strip()) for title, cell in zip(header, cells) if title}
        )
    return records


def save_csv(rows: list[dict], fieldnames: list[str], output_path):
    """Write dict rows to output_path with the given column order."""
    output_path = Path(output_path)
    with output_path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    logging.debug(f"Saved {len(rows)} row(s) to {output_path}")


def load_grid(filename) -> list[list[str]]:
    """Load a CSV file as a raw cell grid; multi-line cells are kept intact."""
    with Path(filename).open(newline="", encoding="utf-8") as csvfile:
        return [list(row) for row in csv.reader(csvfile)]


def save_grid(grid: list[list[str]], output_path):
    output_path = Path(output_path)
    width = max((len(row) for row in grid), default=0)
    with output_path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        for row in grid:
            writer.writerow(list(row) + [""] * (width - len(row)))
