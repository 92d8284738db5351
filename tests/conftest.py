import matplotlib

matplotlib.use("Agg")

import pytest

from kmap_solver import CellValue

H = CellValue.HIGH
L = CellValue.LOW
X = CellValue.DONT_CARE


@pytest.fixture
def wedge_values():
    return [
        H, L, L, L,
        H, H, L, L,
        H, H, H, L,
        H, H, H, H,
    ]
