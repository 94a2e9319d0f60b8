"""Functions to sort package records and lay them out as a table."""

import collections

MIN_NAME_WIDTH = 20
MIN_VERSION_WIDTH = 10

NAME_HEADER = 'Package'
VERSION_HEADER = 'Version'
STATUS_HEADER = 'Status'

ColumnWidths = collections.namedtuple('ColumnWidths', ['name', 'version'])


def sort_records(records):
    """Returns records sorted by display name, ignoring case."""
    return sorted(records, key=lambda record: record.name.lower())


def column_widths(records):
    """Returns the ColumnWidths needed to fit every record."""
    name_width = MIN_NAME_WIDTH
    version_width = MIN_VERSION_WIDTH
    for record in records:
        name_width = max(name_width, len(record.name))
        version_width = max(version_width, len(record.version))
    return ColumnWidths(name_width, version_width)


def format_row(widths, name, version, status=''):
    """Returns one left-justified table row."""
    row = '{:<{}} {:<{}}     {}'.format(name, widths.name, version, widths.version, status)
    return row.rstrip()


def format_header(widths, check_files=False):
    """Returns the header row, with a status column if check_files is set."""
    return format_row(widths, NAME_HEADER, VERSION_HEADER,
                      STATUS_HEADER if check_files else '')


def format_table(records, widths=None):
    """Returns the header and rows for records, which should already be sorted."""
    if widths is None:
        widths = column_widths(records)

    lines = [format_header(widths)]
    lines.extend(format_row(widths, record.name, record.version) for record in records)
    return lines
