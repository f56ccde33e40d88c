import io
import logging

import pytest

from egg.egg_parser.egg_parser import EggParser
from egg.egg_evaluator.egg_evaluator import EggEvaluator
from egg.egg_evaluator.egg_primitives import create_global_environment


# --- Core Components ---

@pytest.fixture
def parser():
    """Provides an EggParser instance."""
    return EggParser()

@pytest.fixture
def evaluator():
    """Provides a fresh EggEvaluator (its own special-form table)."""
    return EggEvaluator()

@pytest.fixture
def output():
    """Captures everything the print() host function writes."""
    return io.StringIO()

@pytest.fixture
def global_env(output):
    """Root environment with the default host bindings, printing to `output`."""
    return create_global_environment(output)

@pytest.fixture
def env(global_env):
    """A program frame on top of the global environment, like run() uses."""
    return global_env.extend({})

@pytest.fixture
def run_egg(evaluator, env):
    """Evaluates source text in the shared `env` frame."""
    def _run(source):
        return evaluator.evaluate_string(source, env)
    return _run


# --- Logging isolation ---

@pytest.fixture
def restore_root_logging():
    """
    Restores root logger handlers and level after tests that call
    setup_logging (which reconfigures the root logger with force=True).
    """
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
