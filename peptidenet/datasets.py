from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

import torch.utils.data as data

from .alphabet import encode_class, encode_sequence

COLUMNS = ("sequence", "class")


class DataLoadError(Exception):
    """The peptide CSV could not be opened or does not have the expected columns."""


class DataParseError(DataLoadError):
    """A row of the peptide CSV does not match the header."""


@dataclass(frozen=True)
class Peptide:
    sequence: str
    label: str


def load_peptides(path: Union[str, Path]) -> List[Peptide]:
    """
    Read peptides from a CSV with a `sequence,class` header.

    Class labels are trimmed and lowercased; sequences are kept as-is.
    Any problem aborts the load, no rows are skipped.
    """
    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8-sig") as fh:
            reader = csv.DictReader(fh)
            missing = [c for c in COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise DataLoadError(f"{path}: missing column(s) {', '.join(missing)}")
            peptides = []
            for row in reader:
                # DictReader fills short rows with None and collects extras under None
                if None in row or any(row[c] is None for c in COLUMNS):
                    raise DataParseError(f"{path}:{reader.line_num}: expected {len(reader.fieldnames)} fields")
                peptides.append(Peptide(sequence=row["sequence"], label=row["class"].strip().lower()))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DataLoadError(f"{path}: {e}") from e
    return peptides


class PeptideDataset(data.Dataset):
    def __init__(self, peptides: Sequence[Peptide]):
        self.peptides = list(peptides)

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> "PeptideDataset":
        return cls(load_peptides(path))

    def __len__(self):
        return len(self.peptides)

    def __getitem__(self, idx):
        p = self.peptides[idx]
        return encode_sequence(p.sequence), encode_class(p.label)
