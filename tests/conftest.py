import pytest

from plot_calculator import PlotCalculator


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def __call__(self, message, category):
        self.messages.append((category, message))

    @property
    def last(self):
        return self.messages[-1] if self.messages else None


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def calculator(notifier):
    return PlotCalculator(notify=notifier)


@pytest.fixture
def client():
    from app import app

    app.config.update(TESTING=True, WTF_CSRF_ENABLED=False)
    with app.test_client() as client:
        yield client
