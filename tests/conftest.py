import pytest


@pytest.fixture
def scenario_records():
    return [
        {'borough': 'BRONX', 'descriptor': 'Dog off leash'},
        {'borough': 'BRONX', 'descriptor': 'Dog off leash'},
        {'borough': 'QUEENS', 'descriptor': 'Loud music'},
    ]


@pytest.fixture
def park_records():
    """A few boroughs with uneven descriptor counts and some ties"""
    rows = []

    def add(borough, descriptor, count):
        rows.extend({'borough': borough, 'descriptor': descriptor, 'unique_key': str(len(rows) + i)}
                    for i in range(count))

    add('BROOKLYN', 'Dog off leash', 12)
    add('MANHATTAN', 'Loud music', 7)
    add('BROOKLYN', 'Alcohol', 5)
    add('QUEENS', 'Barbecue', 3)
    add('MANHATTAN', 'Smoking', 7)
    add('BRONX', 'Dog off leash', 4)
    add('BROOKLYN', 'Loud music', 5)
    add('STATEN ISLAND', 'Unauthorized vending', 1)
    add('QUEENS', 'Loud music', 9)
    add(None, 'Dog off leash', 2)
    return rows
