import sys
from pathlib import Path

import pandas as pd
import pytest

# Make the project root importable without installing the package
PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))


@pytest.fixture
def example_df():
    return pd.DataFrame({
        'Name': ['A', 'A', 'B'],
        'Diameter': [10, 20, 5],
        'Circumference': [31.4, 62.8, 15.7],
    })
