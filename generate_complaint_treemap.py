#!/usr/bin/env python3
"""
Fetch park rule violation complaints from NYC 311, aggregate them by
borough and descriptor, and render an interactive treemap page.

Examples:
  python generate_complaint_treemap.py
  python generate_complaint_treemap.py --output out/treemap.html --open
  python generate_complaint_treemap.py --config my_settings.yaml --json-output out/tree.json
"""

import argparse
import os
import sys
import webbrowser

import yaml

from aggregate_complaints import aggregate_records, borough_totals, print_summary
from build_hierarchy import build_hierarchy, tree_to_dict
from common_utils import FetchOrProcessingError, save_json
from config_loader import ConfigLoader
from fetch_complaints import ComplaintsAPIClient, build_where_clause
from render_treemap import render
from treemap_layout import compute_rectangles, get_tiling_method, leaf_rectangles


def build_treemap(records, width, height, padding=1, tile=None):
    """Records -> (count table, hierarchy root, laid-out rects)"""
    table = aggregate_records(records)
    root = build_hierarchy(table)
    rects = compute_rectangles(root, width, height, padding=padding, tile=tile)
    return table, root, rects


def generate_complaint_treemap(settings, client=None, output_path=None, json_output=None):
    """
    Run the whole pipeline once and return the path of the rendered page.

    Anything that goes wrong, from the request to the layout, comes out
    as FetchOrProcessingError and nothing is rendered.
    """
    dataset = settings.get_dataset_settings()
    layout = settings.get_layout_settings()
    outputs = settings.get_output_paths()
    output_path = output_path or outputs.get('html')
    json_output = json_output or outputs.get('json')

    print("=== Park Complaints Treemap ===")

    try:
        if client is None:
            client = ComplaintsAPIClient(
                base_url=dataset.get('url'),
                timeout=dataset.get('timeout', 60)
            )

        where = build_where_clause(
            dataset.get('start_date'),
            dataset.get('end_date'),
            dataset.get('complaint_type_pattern')
        )
        records = client.fetch_complaints(where, limit=dataset.get('limit'))

        width, height = settings.get_treemap_size()
        table, root, rects = build_treemap(
            records,
            width,
            height,
            padding=layout.get('padding', 1),
            tile=get_tiling_method(layout.get('tile', 'squarify'))
        )
        print_summary(table)

        leaves = leaf_rectangles(rects)
        print(f"\nLaid out {len(leaves)} descriptors across {len(root.children)} boroughs")

        if json_output:
            save_json(tree_to_dict(root), json_output, description="Hierarchy")

        page = render(leaves, borough_totals(table), settings.config, output_path)
    except FetchOrProcessingError:
        raise
    except Exception as e:
        raise FetchOrProcessingError(f"{type(e).__name__}: {e}") from e

    return page


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Render NYC 311 park rule complaints as a treemap'
    )

    parser.add_argument(
        '--config',
        default=None,
        help='YAML settings file (default: config/treemap_config.yaml)'
    )

    parser.add_argument(
        '--output',
        default=None,
        help='HTML file to write (overrides output.html in the config)'
    )

    parser.add_argument(
        '--json-output',
        default=None,
        help='Also write the hierarchy as D3-style JSON to this file'
    )

    parser.add_argument(
        '--open',
        action='store_true',
        help='Open the rendered page in a browser'
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        settings = ConfigLoader(args.config)
        page = generate_complaint_treemap(
            settings,
            output_path=args.output,
            json_output=args.json_output
        )
    except (FetchOrProcessingError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"\n✗ Error fetching or processing data: {e}")
        return 1

    if args.open:
        webbrowser.open('file://' + os.path.abspath(page))

    return 0


if __name__ == "__main__":
    sys.exit(main())
