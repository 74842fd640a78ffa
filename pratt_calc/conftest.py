import os

import pytest

from pratt_calc.environment import Environment
from pratt_calc.evaluator import evaluate
from pratt_calc.lexer import lex
from pratt_calc.parser import parse


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def run(env):
    """Lex, parse and evaluate a source line against the shared test environment."""
    def _run(text):
        return evaluate(parse(lex(text)), env)
    return _run


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    # keep a developer's PRATT_CALC_* variables and .env out of the tests
    for name in list(os.environ):
        if name.startswith("PRATT_CALC_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
