#!/usr/bin/env python3
"""
Aggregate complaint records into counts by borough and descriptor.
"""

import pandas as pd

from common_utils import UNSPECIFIED

GROUP_COLUMNS = ['borough', 'descriptor']


def clean_label(value):
    """Map missing, null or blank labels to the Unspecified sentinel"""
    if value is None:
        return UNSPECIFIED
    if not isinstance(value, str) and pd.isna(value):
        return UNSPECIFIED
    value = str(value)
    if not value.strip():
        return UNSPECIFIED
    return value


def records_to_frame(records):
    """Build a borough/descriptor frame from dict records or an existing DataFrame"""
    if isinstance(records, pd.DataFrame):
        df = records
    else:
        df = pd.DataFrame(list(records))

    df = df.reindex(columns=GROUP_COLUMNS)
    for column in GROUP_COLUMNS:
        df[column] = df[column].map(clean_label).astype(object)
    return df


def aggregate_records(records):
    """
    Count records per (borough, descriptor).

    Returns {borough: {descriptor: count}} with native int counts. Keys
    keep the order in which each pair first appears in the input.
    """
    df = records_to_frame(records)
    table = {}
    if df.empty:
        return table

    counts = df.groupby(GROUP_COLUMNS, sort=False).size()
    for (borough, descriptor), count in counts.items():
        table.setdefault(borough, {})[descriptor] = int(count)
    return table


def borough_totals(table):
    """Boroughs with their totals, largest first (ties keep table order)"""
    totals = [(borough, sum(descriptors.values())) for borough, descriptors in table.items()]
    return sorted(totals, key=lambda x: x[1], reverse=True)


def total_records(table):
    return sum(sum(descriptors.values()) for descriptors in table.values())


def print_summary(table):
    """Print the counts the way the original script logged them"""
    print("\nComplaints by Borough and Type:")
    for borough, total in borough_totals(table):
        print(f"  {borough}: {total:,}")
        for descriptor, count in sorted(table[borough].items(), key=lambda x: x[1], reverse=True):
            print(f"    - {descriptor}: {count:,}")
    print(f"Total complaints: {total_records(table):,}")
