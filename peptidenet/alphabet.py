import torch

SEQUENCE_LENGTH = 20
SENTINEL = 20  # unknown residue and padding share this index

CLASS_NAMES = ("mod. active", "inactive", "very active")
# full label names, not the bare "mod ", "exp", "virtual", "very" tokens of the older matcher
CLASS_LABELS = {
    "mod. active": 0,
    "inactive - exp": 1,
    "inactive - virtual": 1,
    "very active": 2,
}


class AminoAcids:
    def __init__(self):
        self.residues = "ACDEFGHIKLMNPQRSTVWY"
        self.num_residues = len(self.residues)
        self.lookup = {r: i for i, r in enumerate(self.residues)}

    def read(self, indices: torch.Tensor) -> str:
        return ''.join(self.residues[int(i)] if int(i) < self.num_residues else 'X' for i in indices)

    def index(self, sequence: str) -> torch.Tensor:
        encoded = [self.lookup.get(c, SENTINEL) for c in sequence[:SEQUENCE_LENGTH]]
        encoded += [SENTINEL] * (SEQUENCE_LENGTH - len(encoded))
        return torch.tensor(encoded, dtype=torch.long)


_AMINO_ACIDS = AminoAcids()


def encode_sequence(sequence: str) -> torch.Tensor:
    """Fixed-width encoding: truncated or right-padded to SEQUENCE_LENGTH."""
    return _AMINO_ACIDS.index(sequence)


def encode_class(label: str) -> torch.Tensor:
    """One-hot over the three activity classes; all zeros when unrecognized."""
    target = torch.zeros(len(CLASS_NAMES), dtype=torch.long)
    idx = CLASS_LABELS.get(label.lower())
    if idx is not None:
        target[idx] = 1
    return target


def class_name(index: int) -> str:
    return CLASS_NAMES[index]
