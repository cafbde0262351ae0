"""
Tabular column access variants on pandas DataFrames.
"""

import string

import numpy as np
import pandas as pd


def make_frame(n_rows, n_cols=3, seed=0):
    """
    Build a synthetic data frame of standard normal values.

    Parameters
    ----------
    n_rows : int
        Number of rows
    n_cols : int
        Number of columns, named 'a', 'b', 'c', ... (at most 26)
    seed : int
        Seed for numpy's default generator

    Returns
    -------
    df : pandas.DataFrame
    """
    if n_rows < 0:
        raise ValueError(f"n_rows must be non-negative, got {n_rows}")
    if not 1 <= n_cols <= len(string.ascii_lowercase):
        raise ValueError(f"n_cols must be between 1 and 26, got {n_cols}")
    rng = np.random.default_rng(seed)
    columns = list(string.ascii_lowercase[:n_cols])
    return pd.DataFrame(rng.standard_normal((n_rows, n_cols)), columns=columns)


def _require_column(df, col):
    if col not in df.columns:
        raise KeyError(col)


# Whole-column access

def column_by_key(df, col):
    return df[col]


def column_by_attribute(df, col):
    _require_column(df, col)
    return getattr(df, col)


def column_by_loc(df, col):
    return df.loc[:, col]


def column_by_iloc(df, col):
    return df.iloc[:, df.columns.get_loc(col)]


def column_by_get(df, col):
    _require_column(df, col)
    return df.get(col)


def column_to_numpy(df, col):
    return df[col].to_numpy()


COLUMN_ACCESSORS = {
    'key': column_by_key,
    'attribute': column_by_attribute,
    'loc': column_by_loc,
    'iloc': column_by_iloc,
    'get': column_by_get,
    'to_numpy': column_to_numpy,
}


# Single-element access

def element_by_loc(df, row, col):
    return df.loc[row, col]


def element_by_at(df, row, col):
    return df.at[row, col]


def element_by_iat(df, row, col):
    return df.iat[row, df.columns.get_loc(col)]


def element_by_numpy(df, row, col):
    """Positional lookup on the column's underlying array."""
    return df[col].to_numpy()[row]


ELEMENT_ACCESSORS = {
    'loc': element_by_loc,
    'at': element_by_at,
    'iat': element_by_iat,
    'numpy': element_by_numpy,
}
