"""Functions for reading the installed package database"""

import collections
import os

from setup_check.utils import tarball as tarball_utils

# a package owns at most a binary and a source/patch archive
MAX_ARCHIVES = 2

PackageRecord = collections.namedtuple('PackageRecord', ['name', 'version', 'package'])
PackageRecord.__doc__ = """One row of the package report.

Attributes:
    name: Display name, the archive's package name plus -src/-patch for variants.
    version: Version string of the archive.
    package: Name of the package in the database, used to find its file list.
"""


class DatabaseUnavailableError(Exception):
    """Raised when the installed package database is missing or empty.

    Attributes:
        path: Path to the database.
    """

    def __init__(self, path):
        super().__init__('No setup information found in {}'.format(path))
        self.path = path


def match_filters(filters, name):
    """Returns True if name is one of filters, ignoring case.

    An empty filters matches every name.
    """
    if not filters:
        return True
    lowered = name.lower()
    return any(lowered == pkg_filter.lower() for pkg_filter in filters)


def iter_package_records(lines, filters=None):
    """Generator of PackageRecords for the given database lines.

    Each line should be in the form "package archive [archive]".

    Args:
        lines: Iterable of database lines.
        filters: Package names to report. If empty or None, report all packages.
    """
    for line in lines:
        fields = line.split()
        if not fields:
            continue

        package = fields[0]
        if not match_filters(filters, package):
            continue

        for archive in fields[1:1 + MAX_ARCHIVES]:
            try:
                parsed = tarball_utils.parse_filename(archive)
            except tarball_utils.NotATarballError:
                # slot is empty or not a filename, the rest of the line is ignored
                break

            yield PackageRecord(
                name=tarball_utils.display_name(parsed.package, parsed.variant),
                version=parsed.version,
                package=package
            )


def read_package_records(db_path, filters=None):
    """Returns a list of PackageRecords read from the database at db_path.

    Lines are decoded with os.fsdecode, so names that are not valid in the
    filesystem encoding still lead to the right file lists.

    Raises:
        DatabaseUnavailableError: The database could not be opened or has no lines.
    """
    try:
        with open(db_path, 'rb') as db_file:
            lines = [os.fsdecode(line) for line in db_file.read().splitlines()]
    except OSError:
        raise DatabaseUnavailableError(db_path)

    if not lines:
        raise DatabaseUnavailableError(db_path)

    return list(iter_package_records(lines, filters))
