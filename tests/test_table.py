from setup_check.utils.database import PackageRecord
from setup_check.utils.table import (ColumnWidths, column_widths, format_header,
                                     format_row, format_table, sort_records)


def test_sort_ignores_case():
    records = [PackageRecord('Zlib', '1.2', 'Zlib'), PackageRecord('apache', '1.3', 'apache'),
               PackageRecord('bash', '4.1', 'bash')]
    assert [record.name for record in sort_records(records)] == ['apache', 'bash', 'Zlib']


def test_minimum_widths():
    assert column_widths([]) == ColumnWidths(20, 10)
    assert column_widths([PackageRecord('a', '1', 'a')]) == ColumnWidths(20, 10)


def test_widths_grow_to_longest_value():
    records = [
        PackageRecord('a-rather-long-package-name', '1', 'a'),
        PackageRecord('b', '20110101-git-1', 'b'),
    ]
    assert column_widths(records) == ColumnWidths(26, 14)


def test_format_row():
    widths = ColumnWidths(20, 10)
    assert format_row(widths, 'bash', '4.1.10-4', 'OK') == \
        'bash' + ' ' * 16 + ' ' + '4.1.10-4' + ' ' * 2 + '     OK'
    assert format_row(widths, 'bash', '4.1.10-4') == 'bash' + ' ' * 16 + ' 4.1.10-4'


def test_format_header():
    widths = ColumnWidths(20, 10)
    assert format_header(widths) == 'Package' + ' ' * 13 + ' Version'
    assert format_header(widths, check_files=True).endswith('Version        Status')


def test_format_table():
    records = [PackageRecord('bash', '4.1.10-4', 'bash')]
    lines = format_table(records)
    assert len(lines) == 2
    assert lines[0].startswith('Package')
    assert lines[1].startswith('bash ')
