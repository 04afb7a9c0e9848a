#!/usr/bin/env python3
"""
Fetch NYC 311 complaint records from the Socrata (SODA) API.

One GET per run, no pagination and no retry. Set SOCRATA_APP_TOKEN
(environment or .env) to avoid anonymous throttling.
"""

import os

import requests
from dotenv import load_dotenv

from common_utils import FetchOrProcessingError

# Load environment variables
load_dotenv()

BASE_URL = 'https://data.cityofnewyork.us/resource/erm2-nwe9.json'


def quote_soql(value):
    """Quote a string literal for SoQL"""
    return "'" + str(value).replace("'", "''") + "'"


def build_where_clause(start_date, end_date, complaint_type_pattern):
    """Date range plus case-insensitive LIKE filter on complaint_type"""
    return (
        f"created_date BETWEEN {quote_soql(start_date)} AND {quote_soql(end_date)} "
        f"AND UPPER(complaint_type) LIKE UPPER({quote_soql(complaint_type_pattern)})"
    )


class ComplaintsAPIClient:
    def __init__(self, base_url=BASE_URL, timeout=60, app_token=None):
        self.base_url = base_url
        self.timeout = timeout
        self.app_token = app_token if app_token is not None else os.getenv('SOCRATA_APP_TOKEN', '').strip()
        self.headers = {
            'Accept': 'application/json'
        }
        if self.app_token:
            self.headers['X-App-Token'] = self.app_token

    def build_params(self, where, limit=None):
        params = {'$where': where}
        if limit:
            params['$limit'] = str(int(limit))
        return params

    def fetch_complaints(self, where, limit=None):
        """
        Fetch complaint rows matching a SoQL where clause.

        Returns a list of dicts. Any network failure, non-2xx status or
        body that is not a JSON list raises FetchOrProcessingError.
        """
        print(f"\nRequesting complaints from {self.base_url}...")
        print(f"  $where: {where}")

        try:
            response = requests.get(
                self.base_url,
                params=self.build_params(where, limit),
                headers=self.headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise FetchOrProcessingError(f"Request to {self.base_url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise FetchOrProcessingError(
                f"Request failed with status {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchOrProcessingError(f"Malformed JSON in response: {e}") from e

        if not isinstance(data, list):
            raise FetchOrProcessingError(f"Unexpected response type: {type(data).__name__}")

        records = [row for row in data if isinstance(row, dict)]
        print(f"✓ Received {len(records)} records")
        return records
