#!/usr/bin/env python3
"""
Entry point to train and score the peptide activity classifier.

Run:
    python3 -m peptidenet.classify data/train.csv data/test.csv --seed 7
"""

from __future__ import annotations
import argparse

from .datasets import DataLoadError
from .trainer import EPOCHS, PeptideTrainer, TrainerConfig


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Train a 20-32-16-3 perceptron on peptide sequences and report test accuracy.")
    p.add_argument("train_csv", help="CSV with sequence,class columns used for training")
    p.add_argument("test_csv", help="CSV with sequence,class columns used for scoring")
    p.add_argument("--epochs", type=int, default=EPOCHS)
    p.add_argument("--lr", type=float, default=0.1)
    p.add_argument("--seed", type=int, default=None, help="Weight-init seed (None=non-deterministic)")
    p.add_argument("--outdir", type=str, default=None, help="Write history.json and config.json here")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    cfg = TrainerConfig(
        epochs=args.epochs,
        lr=args.lr,
        seed=args.seed,
        outdir=args.outdir,
    )
    try:
        # Training runs during initialization
        PeptideTrainer(args.train_csv, args.test_csv, cfg=cfg, autostart=True)
    except DataLoadError as e:
        raise SystemExit(f"error: {e}")


if __name__ == "__main__":
    main()
