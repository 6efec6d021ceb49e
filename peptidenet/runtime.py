from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .alphabet import AminoAcids, class_name
from .model import PeptideNetwork
from .trainer import PeptideTrainer, TrainerConfig, predict_class, to_input

@dataclass
class PeptideClassifier:
    network: PeptideNetwork
    residues: AminoAcids
    accuracy: Optional[float] = None
    outdir: Optional[Path] = None

    def scores(self, sequence: str) -> List[float]:
        _, _, out = self.network(to_input(self.residues.index(sequence)))
        return out.reshape(-1).tolist()

    def classify(self, sequence: str) -> str:
        _, _, out = self.network(to_input(self.residues.index(sequence)))
        return class_name(predict_class(out))

    def classify_all(self, sequences: List[str]) -> List[str]: return [self.classify(s) for s in sequences]

    @classmethod
    def from_trainer(cls, trainer: PeptideTrainer) -> "PeptideClassifier":
        return cls(network=trainer.network, residues=AminoAcids(),
                   accuracy=trainer.accuracy, outdir=trainer.outdir)

    @classmethod
    def fit(cls, train_path: Union[str, Path], test_path: Union[str, Path],
            cfg: Optional[TrainerConfig] = None, verbose: bool = True) -> "PeptideClassifier":
        trainer = PeptideTrainer(train_path, test_path, cfg=cfg or TrainerConfig(), autostart=True, verbose=verbose)
        return cls.from_trainer(trainer)
