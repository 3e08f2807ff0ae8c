"""
Shared fixtures for ltrkit tests.
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ltrkit.trainer import LtrTrainer

CORPUS = """
Aribeth Bevil Desther Fenthick Aldanon Tomi Linu Grimgnaw Daelan Sharwyn
Aarin Nathyrra Valen Deekin Xanos Linna Mischa Sharwyn Elaith Harben
Boddyknock Neurik Dorna Quinn Tamsil Kurth Jamal Callik Oleff Lavoera
Meldanen Perin Maugrim Ophala Gulnan Heurodis Ferron Belial Arkaine
Lyen Sorka Zokan Vardan Ilyana Morag Nevalle Semarian Uthgar Renard
Yvonne Edrianna Kaelen Torvik Halueth Bellamy Wendrin Oswin Taeryn Gareth
Jhareg Xhaan Zeeble Ahsan Bastion Ioriel Valindra Ysolde Quendra Pherris
"""


@pytest.fixture(scope="session")
def corpus():
    """Names used to train the shared table."""
    return CORPUS


@pytest.fixture(scope="session")
def trained_table(corpus):
    """A table trained on the shared corpus. Do not mutate."""
    return LtrTrainer().train(corpus)


@pytest.fixture
def table(trained_table):
    """A private copy of the trained table."""
    return trained_table.copy()
