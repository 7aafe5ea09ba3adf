import pytest

from tobira.classroom import DeferredScheduler, Navigator, ProgressStore, load_catalog
from tobira.schemas import Chapter, Question


class FakeClock:
    """Manually advanced clock for DeferredScheduler."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return DeferredScheduler(clock=clock)


@pytest.fixture
def chapter():
    return Chapter(
        id=1,
        title="メロスの怒り",
        original_text="メロスは激怒した。",
        simple_text="メロスはとても怒りました。",
        questions=[
            Question(question="Q1", options=["a", "b", "c"], answer="a"),
            Question(question="Q2", options=["a", "b", "c"], answer="b"),
            Question(question="Q3", options=["a", "b", "c"], answer="c"),
        ],
    )


@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "progress.json")


@pytest.fixture
def navigator(catalog, store):
    return Navigator(catalog, store)
