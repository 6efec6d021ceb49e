from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Dict, Any, Sequence

import torch

from .alphabet import SEQUENCE_LENGTH
from .datasets import PeptideDataset
from .model import PeptideNetwork

EPOCHS = 100
# highest residue index; the sentinel (20) therefore scales slightly above 1.0
INPUT_SCALE = 19.0


@dataclass
class TrainerConfig:
    epochs: int = EPOCHS
    lr: float = 0.1
    seed: int | None = None          # weight-init RNG (None = non-deterministic)
    outdir: str | None = None        # history.json / config.json; weights are never written


def to_input(encoded: torch.Tensor) -> torch.Tensor:
    """Encoded sequence -> [1, 20] float row scaled by INPUT_SCALE."""
    return (encoded.to(torch.float32) / INPUT_SCALE).reshape(1, SEQUENCE_LENGTH)


def to_target(encoded: torch.Tensor) -> torch.Tensor:
    return encoded.to(torch.float32).reshape(1, -1)


def train(network: PeptideNetwork, inputs: Sequence[torch.Tensor], targets: Sequence[torch.Tensor],
          epochs: int = EPOCHS, verbose: bool = True) -> List[float]:
    """
    Online gradient descent: one forward/backward per sample, in order, no shuffling.

    Returns the mean squared-error loss of every epoch.
    """
    pairs = [(to_input(x), to_target(y)) for x, y in zip(inputs, targets)]
    losses = []
    for epoch in range(1, epochs + 1):
        total = 0.0
        for x, y in pairs:
            h1, h2, out = network(x)
            total += ((y - out) ** 2).sum().item()
            network.backward(x, h1, h2, out, y)
        loss = total / max(len(pairs), 1)
        losses.append(loss)
        if verbose:
            print(f"Epoch {epoch}: Loss = {loss:.8f}")

    if verbose:
        print("Training completed!")
    return losses


def predict_class(output: torch.Tensor) -> int:
    """Index of the largest output; the lowest index wins ties."""
    row = output.reshape(-1).tolist()
    guess, biggest = 0, row[0]
    for j, v in enumerate(row):
        if v > biggest:
            guess, biggest = j, v
    return guess


def actual_class(target: torch.Tensor) -> int:
    """Index of the one-hot 1; an all-zero target counts as class 0."""
    for j, v in enumerate(target.reshape(-1).tolist()):
        if v == 1.0:
            return j
    return 0


def test(network: PeptideNetwork, inputs: Sequence[torch.Tensor], targets: Sequence[torch.Tensor],
         verbose: bool = True) -> float:
    """Accuracy in [0, 1] over already scaled [1, 20] inputs and [1, 3] targets."""
    total, correct = 0, 0
    for x, y in zip(inputs, targets):
        _, _, out = network(x)
        correct += int(predict_class(out) == actual_class(y))
        total += 1

    accuracy = correct / max(total, 1)
    if verbose:
        print(f"Accuracy: {accuracy:.5f}")
    return accuracy


class PeptideTrainer:
    """
    Trains a PeptideNetwork on one CSV and scores it on another.

    Instantiating this class runs training if autostart=True.

    Artifacts (only when cfg.outdir is set):
      - history.json   (per-epoch loss)
      - config.json    (TrainerConfig plus final accuracy)
    """
    def __init__(self, train_path: str | Path, test_path: str | Path,
                 cfg: TrainerConfig | None = None, autostart: bool = True, verbose: bool = True):
        self.cfg = cfg = cfg or TrainerConfig()
        self.verbose = verbose

        self.generator = torch.Generator()
        if cfg.seed is not None:
            self.generator.manual_seed(cfg.seed)
        else:
            self.generator.seed()

        # Loading happens up front; a bad file aborts before any training
        self.train_ds = PeptideDataset.from_csv(train_path)
        self.test_ds = PeptideDataset.from_csv(test_path)

        self.network = PeptideNetwork(lr=cfg.lr, generator=self.generator)

        self.outdir = Path(cfg.outdir) if cfg.outdir else None
        self.history: List[Dict[str, Any]] = []
        self.accuracy: float | None = None

        if autostart:
            self.run()

    # -------- public API --------
    def run(self) -> float:
        if self.verbose:
            print("Running peptide classification model...")

        inputs, targets = zip(*self.train_ds) if len(self.train_ds) else ((), ())
        losses = train(self.network, inputs, targets, epochs=self.cfg.epochs, verbose=self.verbose)
        self.history = [{"epoch": i, "loss": loss} for i, loss in enumerate(losses, start=1)]

        test_inputs = [to_input(x) for x, _ in self.test_ds]
        test_targets = [to_target(y) for _, y in self.test_ds]
        self.accuracy = test(self.network, test_inputs, test_targets, verbose=self.verbose)

        if self.outdir is not None:
            self._save_history()
        return self.accuracy

    # -------- internals --------
    def _save_history(self):
        self.outdir.mkdir(parents=True, exist_ok=True)
        (self.outdir / "history.json").write_text(json.dumps(self.history, indent=2), encoding="utf-8")
        (self.outdir / "config.json").write_text(
            json.dumps({**asdict(self.cfg), "accuracy": self.accuracy}, indent=2),
            encoding="utf-8",
        )
