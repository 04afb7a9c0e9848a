#!/usr/bin/env python3
"""
Load configuration from YAML for the complaint treemap scripts
"""

import copy
import os

import yaml

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config', 'treemap_config.yaml')

DEFAULT_CONFIG = {
    'dataset': {
        'url': 'https://data.cityofnewyork.us/resource/erm2-nwe9.json',
        'start_date': '2023-01-01T00:00:00',
        'end_date': '2023-12-31T00:00:00',
        'complaint_type_pattern': '%Violation%of%Park%Rules%',
        'limit': 50000,
        'timeout': 60,
    },
    'layout': {
        'width': 1200,
        'height': 800,
        'margin': {'top': 20, 'right': 0, 'bottom': 20, 'left': 0},
        'padding': 1,
        'tile': 'squarify',
    },
    'display': {
        'title': 'Types of Park Rule Violation Complaints by Borough in 2023',
        'description': (
            'This treemap visualises the number of complaints related to violations of park rules '
            'in New York City in 2023. The boroughs are represented by the top-level rectangles, '
            'and the complaint types are represented by the smaller rectangles within each borough. '
            'The size of each rectangle corresponds to the number of complaints.'
        ),
        'footer': 'Data Visualisation & Info Aesthetics | Exercise 2 | Xuan',
        'background': '#3c3c3c',
        'palette': {
            'BRONX': '#fec76f',
            'BROOKLYN': '#f5945c',
            'MANHATTAN': '#b3be62',
            'QUEENS': '#6dbfb8',
            'STATEN ISLAND': '#be95be',
            'Unspecified': '#72757c',
        },
    },
    'output': {
        'html': 'output/park_complaints_treemap.html',
        'json': 'output/park_complaints_hierarchy.json',
    },
}


def merge_settings(base, override):
    """Recursively merge override into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    def __init__(self, config_path=None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config = None
        self.load_config()

    def load_config(self):
        """Load configuration from YAML file, falling back to built-in defaults"""
        loaded = {}
        if os.path.exists(self.config_path):
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file {self.config_path} must contain a mapping")

        self.config = merge_settings(DEFAULT_CONFIG, loaded)

    def get_dataset_settings(self):
        """Get endpoint, date range and complaint filter"""
        return self.config.get('dataset', {})

    def get_layout_settings(self):
        """Get treemap size, margins, padding and tiling method"""
        return self.config.get('layout', {})

    def get_display_settings(self):
        """Get page text and colours"""
        return self.config.get('display', {})

    def get_output_paths(self):
        return self.config.get('output', {})

    def get_treemap_size(self):
        """Treemap area inside the margins"""
        layout = self.get_layout_settings()
        margin = layout.get('margin', {})
        width = layout.get('width', 1200) - margin.get('left', 0) - margin.get('right', 0)
        height = layout.get('height', 800) - margin.get('top', 0) - margin.get('bottom', 0)
        return width, height

