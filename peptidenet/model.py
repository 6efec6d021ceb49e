from __future__ import annotations

from typing import Tuple

import torch
import torch.nn as nn

from .alphabet import CLASS_NAMES, SEQUENCE_LENGTH

INPUT_SIZE = SEQUENCE_LENGTH
HIDDEN1_SIZE = 32
HIDDEN2_SIZE = 16
OUTPUT_SIZE = len(CLASS_NAMES)
INIT_RANGE = 0.1


def random_weights(rows: int, cols: int, generator: torch.Generator) -> torch.Tensor:
    """Uniform in [-INIT_RANGE, INIT_RANGE)."""
    return (torch.rand(rows, cols, generator=generator) * 2.0 - 1.0) * INIT_RANGE


def sigmoid(x: torch.Tensor) -> torch.Tensor:
    return 1.0 / (1.0 + torch.exp(-x))


def sigmoid_derivative(activation: torch.Tensor) -> torch.Tensor:
    # takes the activation, not the pre-activation: s'(z) = a * (1 - a)
    return activation * (1.0 - activation)


class PeptideNetwork(nn.Module):
    """
    Fixed 20 -> 32 -> 16 -> 3 sigmoid perceptron without biases.

    Weights are updated by hand in `backward` (online gradient step on the
    squared error), so they are held as non-gradient parameters.
    """
    def __init__(self, lr: float = 0.1, generator: torch.Generator | None = None):
        super().__init__()
        if generator is None:
            generator = torch.Generator()
            generator.seed()
        self.lr = lr
        self.w_in_h1 = nn.Parameter(random_weights(INPUT_SIZE, HIDDEN1_SIZE, generator), requires_grad=False)
        self.w_h1_h2 = nn.Parameter(random_weights(HIDDEN1_SIZE, HIDDEN2_SIZE, generator), requires_grad=False)
        self.w_h2_out = nn.Parameter(random_weights(HIDDEN2_SIZE, OUTPUT_SIZE, generator), requires_grad=False)

    @torch.no_grad()
    def forward(self, x: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:  # x: [1, 20]
        h1 = sigmoid(x @ self.w_in_h1)      # [1, 32]
        h2 = sigmoid(h1 @ self.w_h1_h2)     # [1, 16]
        out = sigmoid(h2 @ self.w_h2_out)   # [1, 3]
        return h1, h2, out

    @torch.no_grad()
    def backward(self, x: torch.Tensor, h1: torch.Tensor, h2: torch.Tensor,
                 out: torch.Tensor, target: torch.Tensor) -> None:
        delta_out = (target - out) * sigmoid_derivative(out)
        delta_h2 = (delta_out @ self.w_h2_out.T) * sigmoid_derivative(h2)
        delta_h1 = (delta_h2 @ self.w_h1_h2.T) * sigmoid_derivative(h1)

        # all deltas use the pre-update weights
        self.w_h2_out += self.lr * (h2.T @ delta_out)
        self.w_h1_h2 += self.lr * (h1.T @ delta_h2)
        self.w_in_h1 += self.lr * (x.T @ delta_h1)
