import random

import pytest

LOW = "ACD"     # residue indices 0-2
HIGH = "VWY"    # residue indices 17-19


def _write_csv(path, rows, header="sequence,class"):
    path.write_text("\n".join([header] + [f"{s},{c}" for s, c in rows]) + "\n", encoding="utf-8")
    return path


def synthetic_rows(n_per_class, seed):
    rng = random.Random(seed)
    rows = []
    for _ in range(n_per_class):
        rows.append(("".join(rng.choice(LOW) for _ in range(20)), "Mod. Active"))
        rows.append(("".join(rng.choice(HIGH) for _ in range(20)), " very active "))
    return rows


@pytest.fixture
def csv_pair(tmp_path):
    train = _write_csv(tmp_path / "train.csv", synthetic_rows(12, seed=1))
    test = _write_csv(tmp_path / "test.csv", synthetic_rows(5, seed=2))
    return train, test


@pytest.fixture
def write_csv():
    return _write_csv
