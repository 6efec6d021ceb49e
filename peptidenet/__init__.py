from .alphabet import AminoAcids, encode_sequence, encode_class, class_name
from .datasets import Peptide, PeptideDataset, DataLoadError, DataParseError, load_peptides
from .model import PeptideNetwork
from .trainer import PeptideTrainer, TrainerConfig, train, test
from .runtime import PeptideClassifier

__all__ = [
    "AminoAcids", "encode_sequence", "encode_class", "class_name",
    "Peptide", "PeptideDataset", "DataLoadError", "DataParseError", "load_peptides",
    "PeptideNetwork", "PeptideTrainer", "TrainerConfig", "train", "test",
    "PeptideClassifier", "fit",
]
__version__ = "0.1.0"

def fit(train_path: str,
        test_path: str,
        *,
        epochs: int = 100,
        lr: float = 0.1,
        seed: int | None = None,          # weight-init RNG (None = random)
        outdir: str | None = None,
        verbose: bool = True) -> PeptideClassifier:
    """Train a fresh network on train_path, score it on test_path and return a classifier."""
    cfg = TrainerConfig(epochs=epochs, lr=lr, seed=seed, outdir=outdir)
    return PeptideClassifier.fit(train_path, test_path, cfg=cfg, verbose=verbose)
