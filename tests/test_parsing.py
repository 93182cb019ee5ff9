from decimal import Decimal

import pytest

from church_inventory.utils.parsing import parse_cost


@pytest.mark.parametrize('raw, expected', [
    ('250', Decimal('250.00')),
    ('12.5', Decimal('12.50')),
    (' 3.999 ', Decimal('4.00')),
    (7, Decimal('7.00')),
    (Decimal('1.10'), Decimal('1.10')),
])
def test_parse_cost_valid(raw, expected):
    assert parse_cost(raw) == expected


@pytest.mark.parametrize('raw', ['', None, 'abc', '$20', '-5', 'NaN', 'Infinity', '1e400'])
def test_parse_cost_falls_back_to_zero(raw):
    assert parse_cost(raw) == Decimal('0.00')
