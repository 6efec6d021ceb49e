import json

import torch

from peptidenet import trainer
from peptidenet.alphabet import encode_class, encode_sequence
from peptidenet.model import PeptideNetwork
from peptidenet.trainer import PeptideTrainer, TrainerConfig, actual_class, predict_class, to_input, to_target


def network(seed=0):
    return PeptideNetwork(lr=0.1, generator=torch.Generator().manual_seed(seed))


class FixedOutput:
    """Stands in for a network whose output never changes."""
    def __init__(self, row):
        self.out = torch.tensor([row])

    def __call__(self, x):
        return None, None, self.out


def test_to_input_scales_by_highest_residue_index():
    x = to_input(encode_sequence("AY"))
    assert x.shape == (1, 20)
    assert x.dtype == torch.float32
    assert x[0, 0].item() == 0.0
    assert x[0, 1].item() == 1.0
    assert torch.allclose(x[0, 2:], torch.full((18,), 20 / 19.0))


def test_to_target_shape():
    assert to_target(encode_class("very active")).tolist() == [[0.0, 0.0, 1.0]]


def test_train_runs_one_hundred_epochs(capsys):
    inputs = [encode_sequence("ACDACDACD"), encode_sequence("YWVYWVYWV")]
    targets = [encode_class("mod. active"), encode_class("very active")]
    losses = trainer.train(network(), inputs, targets)
    assert len(losses) == 100
    assert losses[-1] < losses[0]
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Epoch 1: Loss = ")
    assert lines[99].startswith("Epoch 100: Loss = ")
    assert lines[-1] == "Training completed!"


def test_train_reports_mean_squared_error():
    nn_ = network()
    x, y = encode_sequence("ACD"), encode_class("inactive - exp")
    _, _, out = network()(to_input(x))
    expected = ((to_target(y) - out) ** 2).sum().item()
    assert abs(trainer.train(nn_, [x], [y], epochs=1, verbose=False)[0] - expected) < 1e-6


def test_train_without_samples():
    assert trainer.train(network(), [], [], epochs=3, verbose=False) == [0.0, 0.0, 0.0]


def test_predict_class_prefers_lowest_index_on_ties():
    assert predict_class(torch.tensor([[0.2, 0.7, 0.7]])) == 1
    assert predict_class(torch.tensor([[0.5, 0.5, 0.5]])) == 0
    assert predict_class(torch.tensor([[0.1, 0.2, 0.3]])) == 2


def test_actual_class_defaults_to_zero():
    assert actual_class(torch.tensor([[0.0, 0.0, 1.0]])) == 2
    assert actual_class(torch.tensor([[0.0, 0.0, 0.0]])) == 0


def test_accuracy(capsys):
    fake = FixedOutput([0.3, 0.3, 0.1])
    x = torch.zeros(1, 20)
    targets = [torch.tensor([[1.0, 0.0, 0.0]]), torch.tensor([[0.0, 1.0, 0.0]]),
               torch.tensor([[0.0, 0.0, 0.0]]), torch.tensor([[0.0, 0.0, 1.0]])]
    assert trainer.test(fake, [x] * 4, targets) == 0.5
    assert capsys.readouterr().out == "Accuracy: 0.50000\n"


def test_accuracy_without_samples():
    assert trainer.test(network(), [], [], verbose=False) == 0.0


def test_trainer_writes_history(csv_pair, tmp_path):
    train_csv, test_csv = csv_pair
    cfg = TrainerConfig(epochs=5, seed=4, outdir=str(tmp_path / "run"))
    t = PeptideTrainer(train_csv, test_csv, cfg=cfg, verbose=False)
    history = json.loads((tmp_path / "run" / "history.json").read_text())
    config = json.loads((tmp_path / "run" / "config.json").read_text())
    assert [row["epoch"] for row in history] == [1, 2, 3, 4, 5]
    assert config["seed"] == 4
    assert config["accuracy"] == t.accuracy
    assert not list((tmp_path / "run").glob("*.pt*"))


def test_trainer_is_reproducible_with_seed(csv_pair):
    cfg = TrainerConfig(epochs=3, seed=11)
    a = PeptideTrainer(*csv_pair, cfg=cfg, verbose=False)
    b = PeptideTrainer(*csv_pair, cfg=cfg, verbose=False)
    assert a.history == b.history
    assert torch.equal(a.network.w_in_h1, b.network.w_in_h1)


def test_default_config_is_not_shared(csv_pair):
    a = PeptideTrainer(*csv_pair, autostart=False, verbose=False)
    b = PeptideTrainer(*csv_pair, autostart=False, verbose=False)
    assert a.cfg is not b.cfg
    assert a.cfg.epochs == 100
