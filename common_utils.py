#!/usr/bin/env python3
"""
Common utilities shared by the complaint treemap scripts.
"""

import json
import os

import numpy as np
import pandas as pd


UNSPECIFIED = 'Unspecified'


class FetchOrProcessingError(Exception):
    """Raised when the dataset cannot be fetched or turned into a treemap"""


def convert_types(obj):
    """Convert numpy types to Python native types for JSON serialization"""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_types(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_types(item) for item in obj]
    elif obj is not None and not isinstance(obj, str) and pd.isna(obj):
        return None
    return obj


def save_json(data, filepath, description="data"):
    """Save data to JSON file with type conversion"""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(convert_types(data), f, indent=2)

    print(f"{description} saved to: {filepath}")
    return filepath
