import sys
import os
import pytest
sys.path.append(os.path.dirname(__file__))

from syntax_tree import block, c_for, program, stmt

@pytest.fixture
def c_for_loop():
    """``for (i = 0; i < count; i++) { sum += i; }`` inside a translation unit."""
    return program(c_for("i = 0", "i < count", "i++", block(stmt("sum += i"))))
