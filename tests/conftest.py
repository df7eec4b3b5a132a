"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np
import pandas as pd

from autoprice.dataset import AUTO_SCHEMA, AutoDataset


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Regression dataset with an intercept column."""
    n = 100
    X = np.column_stack([np.ones(n), rng.standard_normal((n, 2))])
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    X = np.column_stack([np.ones(n), x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y


# Prices the outlier filter must remove; poorly explained by the predictors
PLANTED_OUTLIER_PRICES = (150000.0, 95000.0, 88000.0)


def make_auto_frame(rng, n=60):
    """
    Synthetic table with the Consumer Reports headers.

    log(price) follows the recommended model's form with small noise;
    natural prices stay well below 70000. Three expensive low-power rows
    are appended as outliers.
    """
    hp = rng.uniform(120, 400, n)
    weight = rng.uniform(2500, 5000, n)
    rear = rng.integers(0, 2, n)
    luxury = rng.integers(0, 2, n)
    hybrid = rng.integers(0, 2, n)
    log_price = (
        8.8 + 0.0025 * hp + 0.00012 * weight
        + 0.05 * rear + 0.2 * luxury + 0.08 * hybrid
        + rng.normal(0, 0.08, n)
    )
    frame = pd.DataFrame({
        'Model': [f"Car {i + 1}" for i in range(n)],
        'Price': np.round(np.exp(log_price)),
        'Hp': np.round(hp),
        'Curb Weight(lb)': np.round(weight),
        'length(inch)': np.round(150 + 0.012 * weight + rng.normal(0, 4, n), 1),
        'Disp': np.round(rng.uniform(1.4, 5.7, n), 1),
        'MPG_ovarall': np.round(rng.uniform(15, 45, n)),
        '7over': rng.integers(0, 2, n),
        'cvt': rng.integers(0, 2, n),
        'AWD': rng.integers(0, 2, n),
        'rear': rear,
        'SUV': rng.integers(0, 2, n),
        'Pickup': rng.integers(0, 2, n),
        'Minivan': rng.integers(0, 2, n),
        'Sports': rng.integers(0, 2, n),
        'Luxuary': luxury,
        'Hybrid': hybrid,
    })

    outliers = pd.DataFrame({
        col: [frame[col].iloc[0]] * len(PLANTED_OUTLIER_PRICES) for col in frame.columns
    })
    outliers['Model'] = [f"Outlier {i + 1}" for i in range(len(PLANTED_OUTLIER_PRICES))]
    outliers['Price'] = PLANTED_OUTLIER_PRICES
    outliers['Hp'] = [180.0, 150.0, 200.0]
    outliers['Curb Weight(lb)'] = [3000.0, 2800.0, 3100.0]
    outliers['Luxuary'] = 0
    outliers['Hybrid'] = 0
    outliers['rear'] = [1, 0, 0]
    return pd.concat([frame, outliers], ignore_index=True)


@pytest.fixture
def planted_outlier_prices():
    return PLANTED_OUTLIER_PRICES


@pytest.fixture
def auto_frame(rng):
    return make_auto_frame(rng)


@pytest.fixture
def auto_dataset(auto_frame):
    return AutoDataset.from_dataframe(auto_frame, schema=AUTO_SCHEMA)


@pytest.fixture
def auto_csv(tmp_path, auto_frame):
    path = tmp_path / "Consumer_Reports_April_2019.csv"
    auto_frame.to_csv(path, index=False)
    return path
