import sys
from pathlib import Path

import pytest

# Ensure the project root is importable when pytest starts from any directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rpn import Expression  # noqa: E402


@pytest.fixture
def outputs():
    """解析中缀字符串，返回 (值, 还原后的中缀字符串)"""
    def _outputs(infix):
        expression = Expression.from_infix(infix)
        return expression.evaluate(), expression.to_infix()
    return _outputs
